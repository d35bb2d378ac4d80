# tests/core/loader/test_sources.py
"""
Testes das fontes de chart e dos pontos de entrada (load, load_dir, load_archive).

Os testes asseguram que:
- diretórios viram listas de arquivos com nomes relativos e separador `/`
- `.helmignore` é aplicado apenas a diretórios
- `loader_for` escolhe a fonte via stat
- arquivos que não são gzip são rejeitados
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from atlas_charts.core.loader.errors import SourceError
from atlas_charts.core.loader.sources import (
    ArchiveSource,
    DirectorySource,
    InMemorySource,
    load,
    load_archive,
    load_dir,
    load_source,
    loader_for,
)
from atlas_charts.core.loader.types import BufferedFile


def _write(root: Path, name: str, data: bytes) -> None:
    p = root / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)


@pytest.fixture
def chart_dir(tmp_path: Path, make_chart_yaml) -> Path:
    root = tmp_path / "web"
    _write(root, "Chart.yaml", make_chart_yaml("web"))
    _write(root, "values.yaml", b"replicas: 2\n")
    _write(root, "templates/deployment.yaml", b"kind: Deployment\n")
    _write(root, "templates/.swp", b"editor junk")
    _write(root, "charts/db/Chart.yaml", make_chart_yaml("db"))
    _write(root, "notes/draft.txt", b"draft")
    _write(root, "build.log", b"log")
    _write(root, ".helmignore", b"# local files\n*.log\nnotes/\n")
    return root


def test_directory_source_names_are_relative_and_sorted(chart_dir: Path):
    names = [f.name for f in DirectorySource(chart_dir).resolve()]
    assert names == [
        ".helmignore",
        "Chart.yaml",
        "values.yaml",
        "charts/db/Chart.yaml",
        "templates/deployment.yaml",
    ]


def test_load_dir_builds_tree(chart_dir: Path):
    chart = load_dir(chart_dir)
    assert chart.name() == "web"
    assert chart.values == {"replicas": 2}
    assert {d.name() for d in chart.dependencies} == {"db"}
    assert ".helmignore" in {f.name for f in chart.files}


def test_loader_for_dispatches_on_stat(chart_dir: Path, tmp_path: Path, make_tgz, make_chart_yaml):
    tgz = tmp_path / "web-0.1.0.tgz"
    tgz.write_bytes(make_tgz("web", {"Chart.yaml": make_chart_yaml("web")}))

    assert isinstance(loader_for(chart_dir), DirectorySource)
    assert isinstance(loader_for(str(tgz)), ArchiveSource)

    with pytest.raises(FileNotFoundError):
        loader_for(tmp_path / "missing")


def test_load_archive_file_ignores_helmignore(tmp_path: Path, make_tgz, make_chart_yaml):
    tgz = tmp_path / "web-0.1.0.tgz"
    tgz.write_bytes(
        make_tgz(
            "web",
            {
                "Chart.yaml": make_chart_yaml("web"),
                ".helmignore": b"*.log\n",
                "build.log": b"log",
            },
        )
    )
    chart = load(tgz)
    assert "build.log" in {f.name for f in chart.files}


def test_load_archive_from_stream(make_tgz, make_chart_yaml):
    data = make_tgz("web", {"Chart.yaml": make_chart_yaml("web")})
    assert load_archive(io.BytesIO(data)).name() == "web"


def test_non_gzip_file_is_rejected(tmp_path: Path):
    bogus = tmp_path / "web.tgz"
    bogus.write_bytes(b"plain text")
    with pytest.raises(SourceError, match="gzipped archive"):
        load(bogus)


def test_in_memory_source(make_chart_yaml, load_ctx):
    source = InMemorySource([BufferedFile("Chart.yaml", make_chart_yaml("mem"))])
    chart = load_source(source, load_ctx)
    assert chart.name() == "mem"
    assert load_ctx.events[-1]["message"] == "chart source resolved"
    assert load_ctx.events[-1]["source"] == "InMemorySource"


def test_directory_source_requires_directory(tmp_path: Path):
    with pytest.raises(SourceError):
        DirectorySource(tmp_path / "nope").resolve()
