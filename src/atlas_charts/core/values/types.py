"""Tipo fechado de values e normalização da saída do PyYAML.

Values são sempre uma destas formas:
 - None, bool, int, float, str
 - lista de values
 - mapa de str para values

O PyYAML pode devolver chaves não-string, datas e timestamps. A normalização
converte tudo para a forma fechada acima, de modo que o deep-merge só precise
distinguir "mapa" de "qualquer outra coisa".
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, FrozenSet, List, Union

Value = Union[None, bool, int, float, str, List["Value"], Dict[str, "Value"]]
Values = Dict[str, Value]


def _normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (date, datetime)):
        return key.isoformat()
    return str(key)


def normalize_value(value: Any) -> Value:
    """Converte recursivamente um objeto do PyYAML para `Value`.

    Aliases compartilhados (`b: *a`) são copiados; um alias que referencia
    o próprio nó (`a: &x [*x]`) não tem forma finita e é rejeitado.

    Raises:
        TypeError: se o objeto não tiver representação na forma fechada.
    """
    return _normalize(value, frozenset())


def _normalize(value: Any, ancestors: FrozenSet[int]) -> Value:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value

    if isinstance(value, (date, datetime)):
        return value.isoformat()

    if isinstance(value, (dict, list, tuple)):
        if id(value) in ancestors:
            raise TypeError("recursive value: yaml alias refers to its own node")
        ancestors = ancestors | {id(value)}

    if isinstance(value, dict):
        return {_normalize_key(k): _normalize(v, ancestors) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_normalize(v, ancestors) for v in value]

    if isinstance(value, (set, frozenset)):
        # !!set do YAML vira mapa de chaves com valor nulo
        return {_normalize_key(k): None for k in sorted(value, key=str)}

    raise TypeError(f"unsupported value type: {type(value).__name__}")


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)
