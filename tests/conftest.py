# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Charts.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdos mínimos e determinísticos de Chart.yaml e values.yaml
- construtores de listas de `BufferedFile` em memória
- construtor de archives `.tgz` de chart em memória
- contexto de carregamento controlado (LoadContext)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Archives são construídos com `tarfile` em memória (sem I/O em disco)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture contém lógica de montagem de chart
    - Todas as fixtures são seguras para execução em paralelo

Este módulo existe como infraestrutura de teste e não
como validação funcional do loader.
"""

import io
import tarfile
from datetime import datetime, timezone

import pytest


def chart_yaml(name: str, version: str = "0.1.0", **extra: str) -> bytes:
    lines = [f"name: {name}", f"version: {version}"]
    lines += [f"{k}: {v}" for k, v in extra.items()]
    return ("\n".join(lines) + "\n").encode("utf-8")


def build_tgz(top: str, files: dict) -> bytes:
    """Gera um `.tgz` de chart com as entradas sob o diretório `top/`."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name=f"{top}/{name}")
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


@pytest.fixture
def make_files():
    """
    Fixture factory que converte um dicionário `{nome: bytes}` em uma lista
    ordenada de `BufferedFile`, preservando a ordem de inserção.
    """
    from atlas_charts.core.loader.types import BufferedFile

    def _make(entries: dict):
        return [BufferedFile(name=name, data=data) for name, data in entries.items()]

    return _make


@pytest.fixture
def make_chart_yaml():
    return chart_yaml


@pytest.fixture
def make_tgz():
    return build_tgz


@pytest.fixture
def multi_doc_values_yaml() -> bytes:
    """
    Fixture que fornece um `values.yaml` com três documentos.

    O segundo documento é vazio e o terceiro sobrepõe parcialmente o
    primeiro, exercitando a ordem de fold do leitor multi-documento.

    Returns:
        bytes: Conteúdo YAML multi-documento.
    """
    return b"""\
image:
  repository: nginx
  tag: "1.25"
replicas: 1
ports: [80, 443]
---
---
image:
  tag: "1.27"
ports: [8080]
"""


@pytest.fixture
def load_ctx():
    """
    Fixture que fornece um LoadContext determinístico para testes.

    `load_id` e `created_at` são fixos; o contexto inicia sem eventos
    nem warnings.
    """
    from atlas_charts.core.loader.context import LoadContext

    return LoadContext(
        load_id="load-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )
