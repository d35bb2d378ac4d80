# src/atlas_charts/core/values/hashing.py
"""
Digest de values resolvidos, no formato `sha256:<hex>` usado em Chart.lock.

O digest identifica o conteúdo de values de um chart e acompanha o evento
`chart loaded` do `LoadContext`, permitindo comparar cargas do mesmo chart.

Decisões arquiteturais:
    - Os values passam por `normalize_value` antes da serialização, então a
      saída crua do PyYAML (chaves não-string, datas) e os values já
      normalizados produzem o mesmo digest
    - A serialização JSON ordena chaves; a ordem dos documentos de origem
      só importa pelo resultado do merge

Limites explícitos:
    - Não inclui values de subcharts (cada chart registra o seu)
"""

import hashlib
import json
from typing import Any, Dict

from .types import is_mapping, normalize_value

DIGEST_ALGORITHM = "sha256"


def compute_values_digest(values: Dict[Any, Any]) -> str:
    """
    Calcula o digest dos values de um chart.

    Raises:
        TypeError: se `values` não for um mapa ou não tiver forma de values.
    """
    if not is_mapping(values):
        raise TypeError(f"values must be a mapping, got {type(values).__name__}")

    digest = hashlib.new(DIGEST_ALGORITHM)
    digest.update(
        json.dumps(normalize_value(values), sort_keys=True, separators=(",", ":")).encode("utf-8")
    )
    return f"{DIGEST_ALGORITHM}:{digest.hexdigest()}"
