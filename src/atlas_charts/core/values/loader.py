# src/atlas_charts/core/values/loader.py
"""
Leitor canônico de values multi-documento do Atlas Charts.

Um `values.yaml` pode conter zero ou mais documentos YAML separados por
`---`. Cada documento é lido em ordem, normalizado para o tipo fechado
de values e sobreposto ao acumulado via `merge_maps`.

Responsabilidades do módulo:
    - Ler documentos YAML um a um até o fim do stream
    - Tratar documentos vazios como mapas vazios
    - Rejeitar documentos cuja raiz não seja um mapa
    - Resolver os documentos via deep-merge na ordem encontrada

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Documentos posteriores têm precedência sobre anteriores
    - Um erro em qualquer documento aborta a leitura inteira

Limites explícitos:
    - Não valida values contra `values.schema.json`
    - Não conhece charts, subcharts ou templates
"""

from pathlib import Path
from typing import IO, Any, Dict, Union

import yaml  # PyYAML

from .errors import ValuesDocumentError, ValuesFileNotFoundError
from .merge import merge_maps
from .types import normalize_value

ValuesSource = Union[bytes, str, IO[bytes], IO[str]]


def load_values(source: ValuesSource) -> Dict[str, Any]:
    """
    Lê um stream com um ou mais documentos YAML e retorna os values mesclados.

    Decisões arquiteturais:
        - A leitura usa `yaml.safe_load_all` (sem construção de objetos arbitrários)
        - Cada documento vazio equivale a `{}`
        - O fold começa de `{}` e aplica `merge_maps(acumulado, documento)`

    Args:
        source (ValuesSource): bytes, str ou stream legível (binário ou texto).

    Returns:
        Dict[str, Any]: Values resultantes do merge de todos os documentos.

    Raises:
        ValuesDocumentError: Se um documento não puder ser lido ou não for um mapa.
    """
    values: Dict[str, Any] = {}
    index = 0
    documents = yaml.safe_load_all(source)

    while True:
        try:
            raw = next(documents)
        except StopIteration:
            break
        except yaml.YAMLError as e:
            raise ValuesDocumentError(
                f"error reading yaml document {index}: {e}", index=index
            ) from e

        if raw is None:
            raw = {}

        if not isinstance(raw, dict):
            raise ValuesDocumentError(
                f"cannot unmarshal yaml document {index}: "
                f"root must be a mapping, got {type(raw).__name__}",
                index=index,
            )

        try:
            current = normalize_value(raw)
        except TypeError as e:
            raise ValuesDocumentError(
                f"cannot unmarshal yaml document {index}: {e}", index=index
            ) from e

        values = merge_maps(values, current)
        index += 1

    return values


def read_values_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Carrega values fornecidos pelo usuário a partir de um arquivo.

    Raises:
        ValuesFileNotFoundError: se o arquivo não existir.
        ValuesDocumentError: se algum documento for inválido.
    """
    p = Path(path)
    if not p.is_file():
        raise ValuesFileNotFoundError(f"values file not found: {p}")

    with p.open("rb") as f:
        return load_values(f)
