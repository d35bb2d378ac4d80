"""Atlas Charts — Loader (core).

Componentes canônicos de carregamento de charts:
 - classificação de arquivos pelo nome
 - montagem recursiva de charts e subcharts
 - fontes de chart (diretório, archive, memória)
 - contexto de eventos de carregamento
"""

from .errors import (  # noqa: F401
    LoadError,
    MissingMetadataError,
    MetadataParseError,
    LockParseError,
    ValuesParseError,
    SubchartNamingMismatchError,
    SubchartUnpackError,
    ChartValidationError,
    ArchiveError,
    SourceError,
)

from .archive import read_archive  # noqa: F401
from .assemble import DEFAULT_API_VERSION, load_files  # noqa: F401
from .classify import Classified, FileKind, classify  # noqa: F401
from .context import LoadContext  # noqa: F401
from .ignore import IgnoreRules  # noqa: F401
from .sources import (  # noqa: F401
    ArchiveSource,
    ChartSource,
    DirectorySource,
    InMemorySource,
    load,
    load_archive,
    load_dir,
    load_source,
    loader_for,
)
from .types import BufferedFile  # noqa: F401
