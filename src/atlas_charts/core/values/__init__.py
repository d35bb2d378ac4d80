# src/atlas_charts/core/values/__init__.py
"""
Camada de values do Atlas Charts.

Este pacote reúne a leitura de documentos YAML de values, a política
canônica de deep-merge e o digest dos values resolvidos.

Princípios fundamentais:
    - Nenhuma heurística implícita durante merge
    - O overlay sempre vence fora do caso mapa + mapa
    - A mesma entrada sempre produz os mesmos values

Limites explícitos:
    - Não valida values contra JSON Schema
    - Não monta charts
"""

from .errors import (  # noqa: F401
    ValuesError,
    ValuesTypeError,
    ValuesDocumentError,
    ValuesFileNotFoundError,
)

from .hashing import compute_values_digest  # noqa: F401
from .loader import load_values, read_values_file  # noqa: F401
from .merge import merge_maps  # noqa: F401
from .types import Value, Values, normalize_value  # noqa: F401
