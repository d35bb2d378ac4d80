"""Regras de `.helmignore` para carregamento de charts a partir de diretórios.

Formato (uma regra por linha):
 - linhas vazias e iniciadas por `#` são ignoradas
 - `!` no início nega a regra (reinclui o caminho)
 - `/` no final restringe a regra a diretórios
 - regras contendo `/` casam com o caminho relativo completo;
   as demais casam apenas com o nome base

`*` e `?` não cruzam `/`; `[...]` aceita `^` como negação e `\\` escapa o
caractere seguinte. A última regra que casar decide. Caminhos são sempre
relativos à raiz do chart e usam `/` como separador. Archives nunca passam
por estas regras.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Union

IGNORE_FILE = ".helmignore"

DEFAULT_RULES = ("templates/.?*",)


@lru_cache(maxsize=None)
def _compile(pattern: str) -> "re.Pattern[str]":
    """Traduz um glob para regex: `*` e `?` nunca cruzam `/`."""
    out: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(pattern[i]))
        elif c == "[":
            # a classe nunca é vazia: um `]` logo após `[` ou `[^` é literal
            end = pattern.find("]", i + 3 if pattern[i + 1:i + 2] == "^" else i + 2)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                negate = body.startswith("^")
                if negate:
                    body = body[1:]
                body = body.replace("\\", "\\\\").replace("[", "\\[")
                out.append(f"[{'^' if negate else ''}{body}]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return re.compile("".join(out))


@dataclass(frozen=True)
class IgnoreRule:
    pattern: str
    negate: bool = False
    dir_only: bool = False

    def matches(self, path: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        target = path if "/" in self.pattern else posixpath.basename(path)
        return _compile(self.pattern).fullmatch(target) is not None


@dataclass
class IgnoreRules:
    rules: List[IgnoreRule] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "IgnoreRules":
        out = cls()
        for line in text.splitlines():
            out.add(line)
        return out

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "IgnoreRules":
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    def add(self, line: str) -> None:
        rule = line.strip()
        if not rule or rule.startswith("#"):
            return

        negate = rule.startswith("!")
        if negate:
            rule = rule[1:]

        dir_only = rule.endswith("/")
        rule = rule.rstrip("/").lstrip("/")
        if not rule:
            return

        self.rules.append(IgnoreRule(pattern=rule, negate=negate, dir_only=dir_only))

    def add_defaults(self) -> None:
        for line in DEFAULT_RULES:
            self.add(line)

    def ignored(self, path: str, is_dir: bool = False) -> bool:
        if path in {"", ".", "./"}:
            return False

        decision = False
        for rule in self.rules:
            if rule.matches(path, is_dir):
                decision = not rule.negate
        return decision
