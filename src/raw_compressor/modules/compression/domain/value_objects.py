# src/raw_compressor/modules/compression/domain/value_objects.py
"""
Value Objects para el Bounded Context de Compresión.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Definir inmutables para candidatos, lista de extensiones y resultados.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .exceptions import CandidateError

# === Guía de Organización ===
# ✅ PUREZA: Solo tipos nativos y lógica de validación pura.
# ❌ SIN I/O: No leer disco aquí. Las rutas y flags se pasan al constructor.

RAW_EXTENSIONS = ("cr3", "raw", "nef")


@dataclass(frozen=True)
class FileEntry:
    """
    Entrada producida por el recorrido del directorio de entrada.
    `is_file` es False para directorios, symlinks o tipos indeterminables.
    """

    path: Path
    is_file: bool


@dataclass(frozen=True)
class Candidate:
    """
    Archivo regular seleccionado para compresión.
    Se consume exactamente una vez por un worker.
    """

    path: Path

    def __post_init__(self):
        if not self.path.name:
            raise ValueError(f"Un candidato necesita nombre de archivo: {self.path}")

    @property
    def extension(self) -> str:
        """Extensión original sin el punto (conserva mayúsculas)."""
        return self.path.suffix[1:]


@dataclass(frozen=True)
class AllowList:
    """
    Conjunto de extensiones permitidas, insensible a mayúsculas.
    Se configura una vez al arranque y es de solo lectura para todos los workers.
    """

    extensions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, extensions: Iterable[str]) -> AllowList:
        """Normaliza: sin punto inicial y en minúsculas."""
        normalized = frozenset(ext.lstrip(".").lower() for ext in extensions)
        if "" in normalized:
            raise ValueError("La lista de extensiones no admite valores vacíos.")
        return cls(normalized)

    @classmethod
    def default(cls) -> AllowList:
        return cls.of(RAW_EXTENSIONS)

    def matches(self, path: Path) -> bool:
        """True si la extensión de `path` pertenece a la lista."""
        suffix = path.suffix
        if not suffix:
            return False
        return suffix[1:].lower() in self.extensions


class OutcomeKind(Enum):
    """
    Resultado terminal del procesamiento de un candidato.
    """

    SUCCESS = auto()
    OPEN_ERROR = auto()  # No se pudo abrir el original
    CREATE_ERROR = auto()  # No se pudo crear el archivo comprimido
    COMPRESSION_ERROR = auto()  # Fallo de lectura/escritura a mitad del stream
    FINALIZE_ERROR = auto()  # Fallo al cerrar el frame del compresor
    MOVE_ERROR = auto()  # Fallo al mover el original a la carpeta de originales

    def is_failure(self) -> bool:
        return self is not OutcomeKind.SUCCESS


@dataclass(frozen=True)
class Outcome:
    """
    Resultado por candidato. Nunca se muta ni se reintenta tras crearse.
    """

    candidate: Candidate
    kind: OutcomeKind
    archive_path: Path | None = None
    relocated_path: Path | None = None
    error: CandidateError | None = None

    @classmethod
    def success(
        cls, candidate: Candidate, archive_path: Path, relocated_path: Path
    ) -> Outcome:
        return cls(
            candidate=candidate,
            kind=OutcomeKind.SUCCESS,
            archive_path=archive_path,
            relocated_path=relocated_path,
        )

    @classmethod
    def failure(
        cls,
        candidate: Candidate,
        error: CandidateError,
        archive_path: Path | None = None,
    ) -> Outcome:
        return cls(
            candidate=candidate,
            kind=error.kind,
            archive_path=archive_path,
            error=error,
        )

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


@dataclass(frozen=True)
class BatchSummary:
    """Agregado de resultados de una ejecución completa."""

    outcomes: tuple[Outcome, ...]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> list[Outcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[Outcome]:
        return [o for o in self.outcomes if not o.ok]

    def counts_by_kind(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for outcome in self.outcomes:
            counts[outcome.kind.name] = counts.get(outcome.kind.name, 0) + 1
        return counts
