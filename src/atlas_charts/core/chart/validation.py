"""
Validação estrutural canônica de Chart.

Esta implementação evita dependências externas (ex.: Pydantic, semver)
para manter o core leve; a sintaxe de versão aceita é a forma "loose"
de SemVer usada no ecossistema de charts (prefixo `v` e componentes
menor/patch opcionais).

Diferente da validação de contratos, aqui todas as violações são
coletadas e devolvidas em lista: o loader entrega o chart parcial ao
chamador junto com elas.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional


_ALLOWED_CHART_TYPES = {"", "application", "library"}

_SEMVER_LOOSE = re.compile(
    r"^v?(0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))?(\.(0|[1-9][0-9]*))?"
    r"(-([0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*))?"
    r"(\+([0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*))?$"
)

_ALIAS_FORMAT = re.compile(r"^[a-zA-Z0-9_-]+$")


def is_valid_semver(version: str) -> bool:
    return bool(_SEMVER_LOOSE.match(version))


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _is_plain_name(name: str) -> bool:
    return "/" not in name and "\\" not in name and name not in {".", ".."}


def collect_violations(metadata: Optional[Any]) -> List[str]:
    """Retorna as violações estruturais da metadata (lista vazia = válida)."""
    if metadata is None:
        return ["chart.metadata is required"]

    violations: List[str] = []

    def _expect(cond: bool, msg: str) -> None:
        if not cond:
            violations.append(msg)

    _expect(_is_non_empty_str(metadata.api_version), "chart.metadata.apiVersion is required")

    name = metadata.name
    _expect(_is_non_empty_str(name), "chart.metadata.name is required")
    if _is_non_empty_str(name):
        _expect(_is_plain_name(name), f"chart.metadata.name {name!r} is invalid")

    version = metadata.version
    _expect(_is_non_empty_str(version), "chart.metadata.version is required")
    if _is_non_empty_str(version):
        _expect(is_valid_semver(version), f"chart.metadata.version {version!r} is invalid")

    _expect(
        metadata.type in _ALLOWED_CHART_TYPES,
        "chart.metadata.type must be application or library",
    )

    for m in metadata.maintainers:
        _expect(m is not None, "chart.metadata.maintainers must not contain empty or null nodes")

    seen: Dict[str, Any] = {}
    for dep in metadata.dependencies:
        if dep is None:
            violations.append("dependencies must not contain empty or null nodes")
            continue
        if dep.alias:
            _expect(
                bool(_ALIAS_FORMAT.match(dep.alias)),
                f"dependency {dep.name!r} has disallowed characters in the alias",
            )
        key = dep.alias or dep.name
        _expect(key not in seen, f"more than one dependency with name or alias {key!r}")
        seen[key] = dep

    return violations
