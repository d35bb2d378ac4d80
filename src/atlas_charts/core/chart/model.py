# src/atlas_charts/core/chart/model.py
"""
Modelo canônico de Chart do Atlas Charts.

Este módulo define a entidade central do Atlas Charts: o `Chart`, unidade
empacotada de configuração e templates que pode conter outros charts
(subcharts) como dependências.

Estruturas definidas:
    - ChartFile   → par (nome, bytes) pertencente a um chart
    - Maintainer  → mantenedor declarado em Chart.yaml
    - Dependency  → dependência declarada em Chart.yaml / Chart.lock
    - Metadata    → registro decodificado de Chart.yaml
    - Lock        → registro decodificado de Chart.lock
    - Chart       → chart montado, com árvore de dependências

Decisões arquiteturais:
    - Registros são dataclasses simples, sem dependências externas
    - A decodificação a partir de dict é explícita (`from_dict`)
    - Escalares (números, booleanos, datas) em campos textuais viram texto;
      listas e mapas nesses campos levantam `ChartFieldError`
    - Chaves desconhecidas são ignoradas
    - Dependências só crescem via `add_dependency` (append-only)

Invariantes:
    - Um chart possui no máximo um chart pai
    - A árvore de dependências nunca contém ciclos

Limites explícitos:
    - Não lê arquivos nem archives
    - Não renderiza templates
    - Não valida values contra schema
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .errors import ChartFieldError, DependencyAttachError
from .validation import collect_violations


APIVERSION_V3 = "v3"

_MANIFEST_EXTENSIONS = (".yaml", ".yml", ".json")


# ---------------------------------------------------------------------------
# Helpers de decodificação
# ---------------------------------------------------------------------------

def _as_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _float_text(value: float) -> str:
    """Forma textual mais curta de um float, no estilo `%g` de float32.

    Campos textuais de Chart.yaml aceitam escalares numéricos (`appVersion: 1.0`),
    que são registrados como `"1"`, `"1.1"`, `"1e+07"`.
    """
    if math.isnan(value):
        return ".nan"
    try:
        target = _as_float32(value)
    except OverflowError:
        target = math.copysign(math.inf, value)
    if math.isinf(target):
        return ".inf" if target > 0 else "-.inf"
    if target == 0:
        return "-0" if math.copysign(1.0, target) < 0 else "0"

    for precision in range(1, 10):
        text = f"{target:.{precision - 1}e}"
        if _as_float32(float(text)) == target:
            break

    mantissa, exp_text = text.split("e")
    sign = "-" if mantissa.startswith("-") else ""
    digits = mantissa.lstrip("-").replace(".", "").rstrip("0") or "0"
    exp = int(exp_text)

    if exp < -4 or exp >= 6:
        head, tail = digits[0], digits[1:]
        body = head + ("." + tail if tail else "")
        return f"{sign}{body}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if exp < 0:
        return f"{sign}0.{'0' * (-exp - 1)}{digits}"
    whole = digits[: exp + 1].ljust(exp + 1, "0")
    frac = digits[exp + 1:]
    return f"{sign}{whole}.{frac}" if frac else f"{sign}{whole}"


def _scalar_text(value: Any, where: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise ChartFieldError(f"{where}: expected string, got {type(value).__name__}")


def _str(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return _scalar_text(value, f"{where}.{key}")


def _bool(data: Dict[str, Any], key: str, where: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ChartFieldError(
            f"{where}.{key}: expected boolean, got {type(value).__name__}"
        )
    return value


def _str_list(data: Dict[str, Any], key: str, where: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ChartFieldError(f"{where}.{key}: expected list of strings")
    return [
        "" if v is None else _scalar_text(v, f"{where}.{key}[{i}]")
        for i, v in enumerate(value)
    ]


def _str_map(data: Dict[str, Any], key: str, where: str) -> Dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ChartFieldError(f"{where}.{key}: expected mapping")
    out: Dict[str, str] = {}
    for k, v in value.items():
        name = _scalar_text(k, f"{where}.{key}")
        out[name] = "" if v is None else _scalar_text(v, f"{where}.{key}.{name}")
    return out


def _mapping(data: Any, where: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ChartFieldError(f"{where}: expected mapping, got {type(data).__name__}")
    return data


def _node_list(data: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ChartFieldError(f"{where}.{key}: expected list, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Registros
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChartFile:
    """Arquivo pertencente a um chart (nome relativo, bytes)."""

    name: str
    data: bytes


@dataclass
class Maintainer:
    name: str = ""
    email: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Maintainer":
        d = _mapping(data, "maintainers[]")
        return cls(
            name=_str(d, "name", "maintainer"),
            email=_str(d, "email", "maintainer"),
            url=_str(d, "url", "maintainer"),
        )


@dataclass
class Dependency:
    """Dependência declarada em Chart.yaml ou registrada em Chart.lock."""

    name: str = ""
    version: str = ""
    repository: str = ""
    condition: str = ""
    tags: List[str] = field(default_factory=list)
    enabled: bool = False
    import_values: List[Any] = field(default_factory=list)
    alias: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Dependency":
        d = _mapping(data, "dependencies[]")
        return cls(
            name=_str(d, "name", "dependency"),
            version=_str(d, "version", "dependency"),
            repository=_str(d, "repository", "dependency"),
            condition=_str(d, "condition", "dependency"),
            tags=_str_list(d, "tags", "dependency"),
            enabled=_bool(d, "enabled", "dependency"),
            import_values=list(_node_list(d, "import-values", "dependency")),
            alias=_str(d, "alias", "dependency"),
        )


def _dependencies(data: Dict[str, Any], where: str) -> List[Optional[Dependency]]:
    # nós nulos são preservados para que a validação estrutural os rejeite
    return [
        None if node is None else Dependency.from_dict(node)
        for node in _node_list(data, "dependencies", where)
    ]


@dataclass
class Metadata:
    """Registro decodificado de `Chart.yaml`."""

    api_version: str = ""
    name: str = ""
    version: str = ""
    kube_version: str = ""
    description: str = ""
    type: str = ""
    keywords: List[str] = field(default_factory=list)
    home: str = ""
    sources: List[str] = field(default_factory=list)
    maintainers: List[Optional[Maintainer]] = field(default_factory=list)
    icon: str = ""
    app_version: str = ""
    deprecated: bool = False
    annotations: Dict[str, str] = field(default_factory=dict)
    dependencies: List[Optional[Dependency]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Metadata":
        """Decodifica o mapa raiz de Chart.yaml.

        Raises:
            ChartFieldError: se a raiz não for um mapa ou um campo tiver tipo errado.
        """
        d = _mapping(data, "Chart.yaml")
        return cls(
            api_version=_str(d, "apiVersion", "metadata"),
            name=_str(d, "name", "metadata"),
            version=_str(d, "version", "metadata"),
            kube_version=_str(d, "kubeVersion", "metadata"),
            description=_str(d, "description", "metadata"),
            type=_str(d, "type", "metadata"),
            keywords=_str_list(d, "keywords", "metadata"),
            home=_str(d, "home", "metadata"),
            sources=_str_list(d, "sources", "metadata"),
            maintainers=[
                None if node is None else Maintainer.from_dict(node)
                for node in _node_list(d, "maintainers", "metadata")
            ],
            icon=_str(d, "icon", "metadata"),
            app_version=_str(d, "appVersion", "metadata"),
            deprecated=_bool(d, "deprecated", "metadata"),
            annotations=_str_map(d, "annotations", "metadata"),
            dependencies=_dependencies(d, "metadata"),
        )


@dataclass
class Lock:
    """Registro decodificado de `Chart.lock`."""

    generated: str = ""
    digest: str = ""
    dependencies: List[Optional[Dependency]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Lock":
        d = _mapping(data, "Chart.lock")
        return cls(
            generated=_str(d, "generated", "lock"),
            digest=_str(d, "digest", "lock"),
            dependencies=_dependencies(d, "lock"),
        )


# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------

@dataclass
class Chart:
    """
    Chart montado a partir de uma lista plana de arquivos.

    O Chart consolida:
        - metadata (Chart.yaml) e lock (Chart.lock)
        - values resolvidos (values.yaml, multi-documento)
        - schema bruto (values.schema.json)
        - templates, demais arquivos e a cópia integral (`raw`) da entrada
        - dependências (subcharts) já montadas

    Decisões arquiteturais:
        - Dependências são anexadas apenas via `add_dependency`
        - Um chart anexado passa a pertencer exclusivamente ao pai
        - A validação estrutural devolve a lista de violações, sem levantar
    """

    metadata: Optional[Metadata] = None
    lock: Optional[Lock] = None
    values: Dict[str, Any] = field(default_factory=dict)
    schema: Optional[bytes] = None
    templates: List[ChartFile] = field(default_factory=list)
    files: List[ChartFile] = field(default_factory=list)
    raw: List[ChartFile] = field(default_factory=list)
    _dependencies: List["Chart"] = field(default_factory=list, init=False, repr=False, compare=False)
    _parent: Optional["Chart"] = field(default=None, init=False, repr=False, compare=False)

    # -----------------------------
    # Identidade
    # -----------------------------
    def name(self) -> str:
        if self.metadata is None:
            return ""
        return self.metadata.name

    def app_version(self) -> str:
        if self.metadata is None:
            return ""
        return self.metadata.app_version

    def is_root(self) -> bool:
        return self._parent is None

    @property
    def parent(self) -> Optional["Chart"]:
        return self._parent

    def root(self) -> "Chart":
        chart = self
        while chart._parent is not None:
            chart = chart._parent
        return chart

    def chart_path(self) -> str:
        """Caminho por nomes a partir da raiz, ex.: `parent.child`."""
        if self.is_root():
            return self.name()
        return f"{self._parent.chart_path()}.{self.name()}"

    def chart_full_path(self) -> str:
        """Caminho no layout de diretórios, ex.: `parent/charts/child`."""
        if self.is_root():
            return self.name()
        return f"{self._parent.chart_full_path()}/charts/{self.name()}"

    # -----------------------------
    # Dependências
    # -----------------------------
    @property
    def dependencies(self) -> List["Chart"]:
        return list(self._dependencies)

    def add_dependency(self, *charts: "Chart") -> None:
        for chart in charts:
            if chart is self or chart._parent is not None:
                raise DependencyAttachError(
                    f"chart {chart.name()!r} is already attached to a parent"
                )
            chart._parent = self
            self._dependencies.append(chart)

    def set_dependencies(self, *charts: "Chart") -> None:
        for chart in self._dependencies:
            chart._parent = None
        self._dependencies = []
        self.add_dependency(*charts)

    # -----------------------------
    # Arquivos
    # -----------------------------
    def crds(self) -> List[ChartFile]:
        """Arquivos de CRD declarados em `crds/` deste chart."""
        return [
            f
            for f in self.files
            if f.name.startswith("crds/") and f.name.endswith(_MANIFEST_EXTENSIONS)
        ]

    # -----------------------------
    # Validação
    # -----------------------------
    def validate(self) -> List[str]:
        return collect_violations(self.metadata)
