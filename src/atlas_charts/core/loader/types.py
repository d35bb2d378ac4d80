"""Tipos de entrada do loader de charts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BufferedFile:
    """Entrada de um chart bufferizada em memória.

    `name` é relativo à raiz do chart e sempre usa `/` como separador.
    """

    name: str
    data: bytes
