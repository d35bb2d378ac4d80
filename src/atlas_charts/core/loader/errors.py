# src/atlas_charts/core/loader/errors.py
"""
Exceções canônicas do loader de charts do Atlas Charts.

Este módulo define a hierarquia oficial de exceções levantadas durante a
montagem de um chart a partir de uma lista plana de arquivos.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de parse (metadata, lock, values) são fatais
    - Falhas de subchart são sempre fatais para o chart pai
    - Apenas a validação estrutural devolve um resultado parcial utilizável

Invariantes:
    - Todas as exceções do loader herdam de `LoadError`
    - Nenhum erro é silenciado ou rebaixado para log
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from atlas_charts.core.chart.model import Chart


class LoadError(Exception):
    """
    Exceção base para erros de carregamento de chart.

    Permite captura genérica de qualquer falha do loader, inclusive de
    subcharts aninhados.
    """


class MissingMetadataError(LoadError):
    """
    Nenhuma entrada `Chart.yaml` foi encontrada na lista de arquivos.

    Decisões arquiteturais:
        - A metadata é obrigatória
        - A checagem ocorre antes da validação estrutural
    """


class MetadataParseError(LoadError):
    """`Chart.yaml` não pôde ser decodificado."""


class LockParseError(LoadError):
    """`Chart.lock` não pôde ser decodificado."""


class ValuesParseError(LoadError):
    """Um documento de `values.yaml` não pôde ser lido ou não é um mapa."""


class SubchartNamingMismatchError(LoadError):
    """
    O único membro de um grupo `charts/<nome>.tgz` não se chama `<nome>.tgz`.
    """


class ArchiveError(LoadError):
    """Archive de chart inválido (formato, caminhos ou tamanho)."""


class SourceError(LoadError):
    """Fonte de chart (diretório ou arquivo) não pode ser lida como chart."""


class SubchartUnpackError(LoadError):
    """
    Falha ao montar um subchart.

    Carrega o nome do grupo (`subchart`) e o nome do chart pai (`parent`);
    a causa original fica encadeada em `__cause__`.
    """

    def __init__(self, message: str, *, subchart: str, parent: str) -> None:
        super().__init__(message)
        self.subchart = subchart
        self.parent = parent


class ChartValidationError(LoadError):
    """
    Violações estruturais na metadata do chart.

    Único erro que devolve resultado parcial: o chart montado até a
    validação fica disponível em `chart`, e as violações em `violations`.
    """

    def __init__(
        self,
        violations: List[str],
        *,
        chart: Optional["Chart"] = None,
    ) -> None:
        super().__init__("validation: " + "; ".join(violations))
        self.violations = list(violations)
        self.chart = chart
