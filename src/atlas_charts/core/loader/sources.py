# src/atlas_charts/core/loader/sources.py
"""
Fontes de chart e pontos de entrada de carregamento.

Uma fonte transforma um diretório, um archive ou uma lista em memória na
lista plana e ordenada de `BufferedFile` consumida por `load_files`.

Variantes (conjunto fechado):
    - DirectorySource → percorre um diretório aplicando `.helmignore`
    - ArchiveSource   → decodifica um `.tgz` (arquivo, bytes ou stream)
    - InMemorySource  → repassa uma lista já bufferizada

Decisões arquiteturais:
    - A escolha entre diretório e archive é feita uma única vez, via stat
    - Nomes usam sempre `/` como separador, independente do sistema
    - A ordem dos arquivos de diretório é determinística (ordenada)

Limites explícitos:
    - Não monta charts (delegado a `assemble.load_files`)
    - Não acessa rede nem repositórios remotos
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Optional, Union

from atlas_charts.core.chart.model import Chart

from .archive import MAX_DECOMPRESSED_FILE_SIZE, read_archive
from .assemble import load_files
from .context import LoadContext
from .errors import SourceError
from .ignore import IGNORE_FILE, IgnoreRules
from .types import BufferedFile


_GZIP_MAGIC = b"\x1f\x8b"


@dataclass(frozen=True)
class DirectorySource:
    """Chart descompactado em um diretório."""

    path: Path

    def _rules(self) -> IgnoreRules:
        ignore_file = self.path / IGNORE_FILE
        rules = IgnoreRules.from_file(ignore_file) if ignore_file.is_file() else IgnoreRules()
        rules.add_defaults()
        return rules

    def resolve(self) -> List[BufferedFile]:
        root = self.path
        if not root.is_dir():
            raise SourceError(f"not a chart directory: {root}")

        rules = self._rules()
        files: List[BufferedFile] = []

        for current, dirnames, filenames in os.walk(root):
            rel_dir = Path(current).relative_to(root).as_posix()
            prefix = "" if rel_dir == "." else rel_dir + "/"

            dirnames[:] = sorted(
                d for d in dirnames if not rules.ignored(prefix + d, is_dir=True)
            )

            for fname in sorted(filenames):
                name = prefix + fname
                if rules.ignored(name):
                    continue

                full = Path(current) / fname
                if not full.is_file():
                    raise SourceError(f"cannot load irregular file {name} as it has file mode type bits set")
                if full.stat().st_size > MAX_DECOMPRESSED_FILE_SIZE:
                    raise SourceError(
                        f"chart file {name!r} is larger than the maximum file size "
                        f"{MAX_DECOMPRESSED_FILE_SIZE}"
                    )

                files.append(BufferedFile(name=name, data=full.read_bytes()))

        return files


@dataclass(frozen=True)
class ArchiveSource:
    """Chart empacotado como `.tgz` (caminho, bytes ou stream binário)."""

    source: Union[Path, bytes, IO[bytes]]

    def resolve(self) -> List[BufferedFile]:
        if not isinstance(self.source, Path):
            return read_archive(self.source)

        with self.source.open("rb") as f:
            head = f.read(len(_GZIP_MAGIC))
            if head != _GZIP_MAGIC:
                raise SourceError(
                    f"file '{self.source}' does not appear to be a gzipped archive"
                )
            f.seek(0)
            return read_archive(f)


@dataclass(frozen=True)
class InMemorySource:
    files: List[BufferedFile] = field(default_factory=list)

    def resolve(self) -> List[BufferedFile]:
        return list(self.files)


ChartSource = Union[DirectorySource, ArchiveSource, InMemorySource]


def loader_for(path: Union[str, Path]) -> ChartSource:
    """Escolhe a fonte adequada para um caminho (diretório ou archive).

    Raises:
        FileNotFoundError: se o caminho não existir.
    """
    p = Path(path)
    if stat.S_ISDIR(os.stat(p).st_mode):
        return DirectorySource(p)
    return ArchiveSource(p)


def load_source(source: ChartSource, ctx: Optional[LoadContext] = None) -> Chart:
    files = source.resolve()
    chart = load_files(files, ctx)
    if ctx is not None:
        ctx.log(
            chart=chart.name(),
            level="info",
            message="chart source resolved",
            source=type(source).__name__,
            files=len(files),
        )
    return chart


def load(path: Union[str, Path], ctx: Optional[LoadContext] = None) -> Chart:
    """
    Resolve um caminho para diretório ou archive e carrega o chart.

    Ponto de entrada preferencial: descobre o formato e delega à fonte
    apropriada. `.helmignore` só é avaliado para diretórios.
    """
    return load_source(loader_for(path), ctx)


def load_dir(path: Union[str, Path], ctx: Optional[LoadContext] = None) -> Chart:
    return load_source(DirectorySource(Path(path)), ctx)


def load_archive(
    source: Union[bytes, IO[bytes]],
    ctx: Optional[LoadContext] = None,
) -> Chart:
    return load_source(ArchiveSource(source), ctx)
