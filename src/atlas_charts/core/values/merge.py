# src/atlas_charts/core/values/merge.py
"""
Utilitário canônico de deep-merge de values.

Este módulo implementa a política oficial de deep-merge utilizada pelo
Atlas Charts tanto para combinar os documentos de um `values.yaml`
multi-documento quanto para sobrepor values fornecidos pelo usuário.

Política de merge (v1):
    - mapa + mapa → merge recursivo por chave
    - qualquer outro par → o overlay substitui o valor base
    - listas nunca são concatenadas nem unidas
    - conflito de tipos (mapa vs lista, mapa vs escalar) → o overlay vence

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - O resultado não compartilha estruturas mutáveis com os inputs

Invariantes:
    - Chaves presentes apenas na base são preservadas
    - Chaves presentes apenas no overlay são adicionadas
    - merge_maps(merge_maps(a, b), b) == merge_maps(a, b)

Limites explícitos:
    - Não lê arquivos nem streams
    - Não realiza coerção de tipos
    - Merge N-way é responsabilidade do chamador (fold de pares)
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ValuesTypeError


def merge_maps(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico do overlay sobre a base.

    Decisões arquiteturais:
        - Apenas mapas dos dois lados disparam recursão
        - Em qualquer outro caso o valor do overlay é copiado por inteiro
        - O resultado é sempre um novo dicionário

    Args:
        base (Dict[str, Any]): Values base (ex.: documento anterior, defaults do chart).
        overlay (Dict[str, Any]): Values que sobrepõem a base.

    Returns:
        Dict[str, Any]: Novo dicionário resultante do deep-merge.

    Raises:
        ValuesTypeError: Se `base` ou `overlay` não forem dicionários.
    """

    if not isinstance(base, dict) or not isinstance(overlay, dict):
        raise ValuesTypeError(
            f"deep-merge requires mappings at the root, got: "
            f"{type(base).__name__} vs {type(overlay).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, overlay_value in overlay.items():
        base_value = result.get(key)

        # mapa -> merge recursivo
        if isinstance(base_value, dict) and isinstance(overlay_value, dict):
            result[key] = merge_maps(base_value, overlay_value)
            continue

        result[key] = deepcopy(overlay_value)

    return result
