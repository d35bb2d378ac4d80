# src/atlas_charts/__init__.py
"""
Atlas Charts — carregamento de charts e resolução de values.

Este pacote raiz define o namespace público do Atlas Charts: a montagem
de charts (unidades empacotadas de configuração e templates, possivelmente
com subcharts) a partir de diretórios, archives ou arquivos em memória.

Arquitetura em alto nível:
    - core.values → leitura de values multi-documento e deep-merge
    - core.chart  → entidade Chart e validação estrutural
    - core.loader → classificação de arquivos, montagem recursiva e fontes
"""

from .core.chart import Chart  # noqa: F401
from .core.loader import BufferedFile, LoadContext, LoadError, load, load_files  # noqa: F401
from .core.values import load_values, merge_maps  # noqa: F401

__all__ = [
    "BufferedFile",
    "Chart",
    "LoadContext",
    "LoadError",
    "load",
    "load_files",
    "load_values",
    "merge_maps",
]
