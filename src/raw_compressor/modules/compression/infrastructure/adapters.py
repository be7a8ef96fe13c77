# src/raw_compressor/modules/compression/infrastructure/adapters.py
"""
Adaptadores de Infraestructura para Compresión.

Arquitectura: Modular Monolith
Capa: Infrastructure (Adapters)
Responsabilidad: Implementar los puertos del dominio usando tecnologías concretas (OS, lzma).
"""

from __future__ import annotations

import logging
import lzma
import os
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any, BinaryIO

from raw_compressor.modules.compression.domain.exceptions import CodecError
from raw_compressor.modules.compression.domain.ports.file_system import FileSystemPort
from raw_compressor.modules.compression.domain.value_objects import FileEntry
from raw_compressor.modules.compression.infrastructure.observability import (
    measure_time,
)

logger = logging.getLogger(__name__)

# Nivel moderado (no máximo): constante fija, no configurable.
XZ_PRESET = 6


class LocalFileSystemAdapter(FileSystemPort):
    """
    Implementación que interactúa con el sistema de archivos local del OS.
    """

    def exists(self, path: Path) -> bool:
        return os.path.exists(path)

    @measure_time(metric_name="scan_latency")
    def list_entries(self, root: Path) -> list[FileEntry]:
        """
        Recorrido depth-first con os.scandir.
        Los symlinks no se siguen ni cuentan como archivos regulares.
        Directorios ilegibles se omiten con un warning.
        """
        if not os.path.isdir(root):
            logger.warning(f"Directorio de entrada no existe: {root}")
            return []

        entries = list(self._walk(Path(os.path.abspath(root))))
        logger.info(f"Entradas encontradas en {root}: {len(entries)}")
        return entries

    def _walk(self, directory: Path) -> Iterator[FileEntry]:
        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"No se pudo listar {directory}: {e}")
            return

        for child in children:
            try:
                is_file = child.is_file(follow_symlinks=False)
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                # Tipo indeterminable: se reporta como no-archivo
                is_file = is_dir = False

            yield FileEntry(path=Path(child.path), is_file=is_file)
            if is_dir:
                yield from self._walk(Path(child.path))

    def open_source(self, path: Path) -> BinaryIO:
        return open(path, "rb")

    def create_archive(self, path: Path) -> BinaryIO:
        return open(path, "wb")

    def move(self, source: Path, target: Path) -> None:
        # rename puro: entre dispositivos falla (no hay copia + borrado)
        os.rename(source, target)

    def ensure_directory(self, path: Path) -> None:
        os.makedirs(path, exist_ok=True)


class _XzStreamCompressor:
    """Envuelve lzma.LZMACompressor traduciendo sus errores a CodecError."""

    def __init__(self, preset: int):
        # El preset 6 reserva ~94 MiB por compresor: puede fallar por memoria
        try:
            self._compressor = lzma.LZMACompressor(format=lzma.FORMAT_XZ, preset=preset)
        except (lzma.LZMAError, MemoryError) as e:
            raise CodecError(f"No se pudo inicializar el compresor xz: {e}") from e

    def compress(self, data: bytes) -> bytes:
        try:
            return self._compressor.compress(data)
        except (lzma.LZMAError, MemoryError) as e:
            raise CodecError(f"Fallo del compresor xz: {e}") from e

    def flush(self) -> bytes:
        try:
            return self._compressor.flush()
        except (lzma.LZMAError, MemoryError) as e:
            raise CodecError(f"Fallo al cerrar el stream xz: {e}") from e


class XzArchiveCodec:
    """
    Codec único del sistema: contenedor .xz (un solo stream) con preset 6.
    """

    suffix = "xz"

    def __init__(self, preset: int = XZ_PRESET):
        self.preset = preset

    def new_compressor(self) -> _XzStreamCompressor:
        return _XzStreamCompressor(self.preset)


class InMemoryReporter:
    """
    Implementación en memoria del ProgressReporter.
    Útil para tests y para embeber el pipeline sin logging global.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.events: list[dict[str, Any]] = []

    def event(self, name: str, payload: dict[str, Any], level: str = "INFO") -> None:
        with self._lock:
            self.events.append({"event": name, "level": level, "data": dict(payload)})

    def names(self) -> list[str]:
        with self._lock:
            return [e["event"] for e in self.events]

    def of(self, name: str) -> list[dict[str, Any]]:
        with self._lock:
            return [e for e in self.events if e["event"] == name]
