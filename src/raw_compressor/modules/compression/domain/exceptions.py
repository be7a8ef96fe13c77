# src/raw_compressor/modules/compression/domain/exceptions.py
"""
Excepciones del dominio de Compresión.

Arquitectura: Domain Layer
Responsabilidad: Definir errores semánticos independientes de la infraestructura.
"""

from __future__ import annotations

from pathlib import Path

from .value_objects import OutcomeKind


class CompressionPipelineError(Exception):
    """Clase base para errores del pipeline de archivado."""

    pass


class CandidateError(CompressionPipelineError):
    """
    Fallo recuperable a nivel de batch: afecta solo a un candidato.
    Lleva la ruta involucrada y la causa subyacente.
    """

    kind: OutcomeKind
    action = "procesar"

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"No se pudo {self.action} {path}: {cause}")


class OpenError(CandidateError):
    """El original no se pudo abrir (permisos, archivo desaparecido)."""

    kind = OutcomeKind.OPEN_ERROR
    action = "abrir"


class CreateError(CandidateError):
    """El archivo comprimido no se pudo crear (directorio ausente, disco lleno)."""

    kind = OutcomeKind.CREATE_ERROR
    action = "crear"


class CompressionError(CandidateError):
    """Fallo de lectura/escritura a mitad del stream. El parcial queda en disco."""

    kind = OutcomeKind.COMPRESSION_ERROR
    action = "comprimir"


class FinalizeError(CandidateError):
    """El compresor no pudo escribir el frame final."""

    kind = OutcomeKind.FINALIZE_ERROR
    action = "finalizar"


class MoveError(CandidateError):
    """El original no se pudo mover (rename entre dispositivos, permisos)."""

    kind = OutcomeKind.MOVE_ERROR
    action = "mover"


class DirectoryCreationError(CompressionPipelineError):
    """
    Error fatal: la carpeta de originales no se pudo crear.
    Aborta toda la ejecución antes de procesar candidatos.
    """

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"No se pudo crear la carpeta de originales {path}: {cause}")


class CodecError(CompressionPipelineError):
    """Fallo interno del codec (datos corruptos, memoria)."""

    pass
