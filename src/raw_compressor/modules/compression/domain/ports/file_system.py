# src/raw_compressor/modules/compression/domain/ports/file_system.py
"""
Puerto (Interface) para operaciones de sistema de archivos requeridas por el dominio.

Arquitectura: Modular Monolith
Capa: Domain -> Ports
Responsabilidad: Abstraer recorrido, lectura, escritura y reubicación de archivos.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from raw_compressor.modules.compression.domain.value_objects import FileEntry


class FileSystemPort(ABC):
    """
    Contrato para interactuar con el almacenamiento local.
    Todas las operaciones de I/O lanzan OSError ante fallos; el caso de uso
    las traduce a errores de dominio.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Verifica si una ruta existe. Uso: unicidad de nombres."""
        pass

    @abstractmethod
    def list_entries(self, root: Path) -> list[FileEntry]:
        """
        Lista recursiva (depth-first) de entradas bajo `root`.
        El orden entre hermanos no forma parte del contrato.
        """
        pass

    @abstractmethod
    def open_source(self, path: Path) -> BinaryIO:
        """Abre un original en modo lectura binaria."""
        pass

    @abstractmethod
    def create_archive(self, path: Path) -> BinaryIO:
        """Crea el archivo de destino en modo escritura binaria."""
        pass

    @abstractmethod
    def move(self, source: Path, target: Path) -> None:
        """Renombra `source` a `target`."""
        pass

    @abstractmethod
    def ensure_directory(self, path: Path) -> None:
        """Crea el directorio (recursivo) si no existe."""
        pass
