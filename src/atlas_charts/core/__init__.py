# src/atlas_charts/core/__init__.py
"""
Core do Atlas Charts.

Este pacote contém a implementação canônica do carregamento de charts:
a montagem de um chart (e de sua árvore de subcharts) a partir de uma
lista plana de arquivos e a resolução dos values via deep-merge.

Componentes principais:
    - values → leitura multi-documento, deep-merge e digest de values
    - chart  → entidade Chart, registros de metadata/lock e validação estrutural
    - loader → classificação, montagem recursiva e fontes de chart

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo erro chega ao chamador
    - Execução síncrona, sem estado global compartilhado
    - Separação estrita entre I/O (fontes) e lógica de montagem

Limites explícitos:
    - Não renderiza templates
    - Não valida values contra JSON Schema
    - Não resolve dependências remotas nem restrições de versão
"""
