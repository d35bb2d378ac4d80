"""Atlas Charts — Chart (core).

Componentes canônicos da entidade Chart:
 - registros de metadata/lock decodificados de YAML
 - árvore de dependências append-only
 - validação estrutural
"""

from .errors import ChartError, ChartFieldError, DependencyAttachError  # noqa: F401
from .model import (  # noqa: F401
    APIVERSION_V3,
    Chart,
    ChartFile,
    Dependency,
    Lock,
    Maintainer,
    Metadata,
)
from .validation import collect_violations, is_valid_semver  # noqa: F401
