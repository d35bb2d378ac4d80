"""Erros canônicos do domínio de Chart (Atlas Charts).

Falhas de decodificação de `Chart.yaml`/`Chart.lock` para os registros
tipados produzem erros explícitos e estáveis; o loader os encapsula.
"""


class ChartError(Exception):
    """Erro base do domínio de chart."""


class ChartFieldError(ChartError):
    """Campo de Chart.yaml/Chart.lock com tipo incompatível com o registro."""


class DependencyAttachError(ChartError):
    """Subchart já possui um chart pai e não pode ser anexado novamente."""
