# src/atlas_charts/core/values/errors.py
"""
Exceções canônicas da camada de values do Atlas Charts.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura de documentos YAML de values e a resolução via deep-merge.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens identificam o documento ou a chave problemática

Invariantes:
    - Todas as exceções de values herdam de `ValuesError`
    - Nenhuma exceção representa erro de montagem de chart

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do loader de charts
"""

from typing import Optional


class ValuesError(Exception):
    """
    Exceção base para erros relacionados a values.

    Todas as exceções levantadas durante leitura, normalização e merge
    de values devem herdar desta classe.
    """


class ValuesTypeError(ValuesError):
    """
    Exceção levantada quando o deep-merge recebe algo que não é um mapa
    no nível raiz.

    Decisões arquiteturais:
        - Conflitos de tipo em chaves internas NÃO são erro (o overlay vence)
        - Apenas o nível raiz exige dicionários dos dois lados
    """


class ValuesDocumentError(ValuesError):
    """
    Exceção levantada quando um documento de um stream multi-documento
    não pode ser lido ou não é um mapa.

    O índice do documento (base zero) é preservado em `index` para
    diagnóstico.
    """

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class ValuesFileNotFoundError(ValuesError):
    """Arquivo de values informado pelo usuário não existe."""
