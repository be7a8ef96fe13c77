# src/raw_compressor/modules/compression/domain/ports/codec.py
"""
Puerto para el Codec de Archivado.

Arquitectura: Domain Port (Interface)
Responsabilidad: Definir el contrato de compresión en streaming.
"""

from __future__ import annotations

from typing import Protocol


class StreamCompressor(Protocol):
    """Compresor con estado para un único archivo."""

    def compress(self, data: bytes) -> bytes:
        """
        Alimenta un bloque y devuelve la salida comprimida disponible.

        Raises:
            CodecError: Si el motor de compresión falla.
        """
        ...

    def flush(self) -> bytes:
        """
        Cierra el stream y devuelve los bytes finales (metadata del frame).

        Raises:
            CodecError: Si el motor de compresión falla.
        """
        ...


class ArchiveCodec(Protocol):
    """
    Contrato abstracto para el codec (nivel fijo, no configurable).

    Implementaciones esperadas:
    - XzArchiveCodec (Infraestructura)
    """

    @property
    def suffix(self) -> str:
        """Extensión agregada al nombre del archivo comprimido (sin punto)."""
        ...

    def new_compressor(self) -> StreamCompressor:
        ...
