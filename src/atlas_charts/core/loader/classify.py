"""Classificação de arquivos de um chart pelo nome.

Cada arquivo é roteado para exatamente um destino, avaliando os
predicados nesta ordem:

 1. `Chart.yaml`          → METADATA
 2. `Chart.lock`          → LOCK
 3. `values.yaml`         → VALUES
 4. `values.schema.json`  → SCHEMA
 5. prefixo `templates/`  → TEMPLATE
 6. prefixo `charts/`     → FILE para `.prov`, senão SUBCHART (com grupo)
 7. qualquer outro        → FILE

Os nomes fazem parte do formato de chart e são comparados literalmente
(case-sensitive). A classificação em si nunca falha.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

CHART_FILE = "Chart.yaml"
LOCK_FILE = "Chart.lock"
VALUES_FILE = "values.yaml"
SCHEMA_FILE = "values.schema.json"
TEMPLATES_DIR = "templates/"
CHARTS_DIR = "charts/"
PROVENANCE_EXT = ".prov"


def _ext(name: str) -> str:
    base = name.rsplit("/", 1)[-1]
    i = base.rfind(".")
    return base[i:] if i >= 0 else ""


class FileKind(str, Enum):
    METADATA = "metadata"
    LOCK = "lock"
    VALUES = "values"
    SCHEMA = "schema"
    TEMPLATE = "template"
    SUBCHART = "subchart"
    FILE = "file"


@dataclass(frozen=True)
class Classified:
    """Resultado da classificação de um arquivo.

    Para SUBCHART, `group` é o segmento logo após `charts/` e `member` é o
    nome sem o prefixo `charts/` (ex.: `foo/Chart.yaml` ou `foo.tgz`).
    """

    kind: FileKind
    group: Optional[str] = None
    member: Optional[str] = None


def classify(name: str) -> Classified:
    if name == CHART_FILE:
        return Classified(FileKind.METADATA)
    if name == LOCK_FILE:
        return Classified(FileKind.LOCK)
    if name == VALUES_FILE:
        return Classified(FileKind.VALUES)
    if name == SCHEMA_FILE:
        return Classified(FileKind.SCHEMA)
    if name.startswith(TEMPLATES_DIR):
        return Classified(FileKind.TEMPLATE)
    if name.startswith(CHARTS_DIR):
        # assinatura de proveniência acompanha o chart pai
        if _ext(name) == PROVENANCE_EXT:
            return Classified(FileKind.FILE)
        member = name[len(CHARTS_DIR):]
        group = member.split("/", 1)[0]
        return Classified(FileKind.SUBCHART, group=group, member=member)
    return Classified(FileKind.FILE)


def is_excluded_group(group: str) -> bool:
    """Grupos iniciados por `_` ou `.` nunca são carregados como subchart."""
    return group[:1] in {"_", "."}


def is_archive_group(group: str) -> bool:
    return _ext(group) == ".tgz"
