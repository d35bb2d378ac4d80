# src/atlas_charts/core/loader/archive.py
"""
Decodificação de archives de chart (`.tgz`).

Um archive de chart é um tar comprimido com gzip cujas entradas vivem
sob um único diretório de topo (`mychart/Chart.yaml`, ...). Este módulo
transforma o stream em uma lista plana de `BufferedFile` com o diretório
de topo removido, pronta para o loader.

Decisões arquiteturais:
    - Apenas arquivos regulares são considerados
    - Caminhos absolutos ou que escapam do diretório base são rejeitados
    - O tamanho descomprimido é limitado por arquivo e por chart
    - `.helmignore` NÃO é avaliado dentro de archives

Limites explícitos:
    - Não monta o chart (responsabilidade de `assemble.load_files`)
    - Não verifica assinaturas de proveniência
"""

from __future__ import annotations

import io
import posixpath
import re
import tarfile
from typing import IO, List, Union

from .errors import ArchiveError
from .types import BufferedFile


MAX_DECOMPRESSED_CHART_SIZE = 100 * 1024 * 1024
MAX_DECOMPRESSED_FILE_SIZE = 5 * 1024 * 1024

_DRIVE_PATH = re.compile(r"^[a-zA-Z]:/")
_PAX_GLOBAL_HEADER = "pax_global_header"


def _member_name(raw_name: str) -> str:
    """Remove o diretório de topo e valida o caminho resultante.

    Retorna string vazia para entradas que vivem no próprio topo.
    """
    name = raw_name.replace("\\", "/")
    parts = name.split("/", 1)

    if parts[0] == "Chart.yaml":
        raise ArchiveError("chart yaml not in base directory")
    if len(parts) < 2:
        return ""

    name = parts[1]
    if posixpath.isabs(name) or _DRIVE_PATH.match(name):
        raise ArchiveError("chart illegally contains absolute paths")

    cleaned = posixpath.normpath(name)
    if cleaned == "." or cleaned == ".." or cleaned.startswith("../"):
        raise ArchiveError(
            f"chart illegally contains content outside the base directory: {raw_name!r}"
        )
    return cleaned


def read_archive(source: Union[bytes, IO[bytes]]) -> List[BufferedFile]:
    """
    Lê um archive de chart e retorna seus arquivos em ordem de aparição.

    Args:
        source: bytes do archive ou stream binário legível.

    Returns:
        List[BufferedFile]: Arquivos do chart, com nomes relativos à raiz do chart.

    Raises:
        ArchiveError: Se o stream não for um tar.gz válido, contiver caminhos
            ilegais, exceder os limites de tamanho ou não contiver arquivos.
    """
    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source

    files: List[BufferedFile] = []
    remaining = MAX_DECOMPRESSED_CHART_SIZE

    try:
        with tarfile.open(fileobj=stream, mode="r|gz") as tar:
            for member in tar:
                if member.name == _PAX_GLOBAL_HEADER or not member.isreg():
                    continue

                name = _member_name(member.name)
                if not name:
                    continue

                if member.size > MAX_DECOMPRESSED_FILE_SIZE:
                    raise ArchiveError(
                        f"decompressed chart file {name!r} is larger than the "
                        f"maximum file size {MAX_DECOMPRESSED_FILE_SIZE}"
                    )
                remaining -= member.size
                if remaining < 0:
                    raise ArchiveError(
                        "decompressed chart is larger than the maximum size "
                        f"{MAX_DECOMPRESSED_CHART_SIZE}"
                    )

                extracted = tar.extractfile(member)
                data = extracted.read() if extracted is not None else b""
                files.append(BufferedFile(name=name, data=data))
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ArchiveError(f"cannot read chart archive: {e}") from e

    if not files:
        raise ArchiveError("no files in chart archive")

    return files
