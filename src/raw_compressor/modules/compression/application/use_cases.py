# src/raw_compressor/modules/compression/application/use_cases.py
"""
Casos de Uso para el Archivado de archivos RAW.

Arquitectura: Modular Monolith
Capa: Application
Responsabilidad: Comprimir cada candidato, reubicar su original y coordinar el batch en paralelo.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from raw_compressor.core.value_objects import PositiveValue

# === Imports de Dominio ===
from raw_compressor.modules.compression.domain.exceptions import (
    CandidateError,
    CodecError,
    CompressionError,
    CreateError,
    DirectoryCreationError,
    FinalizeError,
    MoveError,
    OpenError,
)
from raw_compressor.modules.compression.domain.ports.codec import ArchiveCodec
from raw_compressor.modules.compression.domain.ports.file_system import FileSystemPort
from raw_compressor.modules.compression.domain.ports.reporter import ProgressReporter
from raw_compressor.modules.compression.domain.services import (
    archive_destination_for,
    original_target_for,
    select_candidates,
    unique_path,
)
from raw_compressor.modules.compression.domain.value_objects import (
    AllowList,
    BatchSummary,
    Candidate,
    Outcome,
    OutcomeKind,
)

# Tamaño de bloque para el streaming (1 MiB)
CHUNK_SIZE = 1024 * 1024


def available_parallelism() -> int:
    """CPUs utilizables por este proceso (respeta la afinidad de CPU del proceso)."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


class CompressAndRelocate:
    """
    Caso de Uso: procesar UN candidato.

    Secuencia estricta (cada paso es una frontera dura):
    1. Nombre de destino único.
    2. Abrir original            -> OpenError
    3. Crear comprimido          -> CreateError
    4. Stream de compresión      -> CompressionError (el parcial queda en disco)
    5. Finalizar frame           -> FinalizeError
    6. Mover original            -> MoveError

    Nunca lanza errores de candidato: los convierte en Outcome.
    """

    def __init__(
        self,
        file_system: FileSystemPort,
        codec: ArchiveCodec,
        reporter: ProgressReporter,
    ):
        self.fs = file_system
        self.codec = codec
        self.reporter = reporter

    def execute(self, candidate: Candidate, originals_dir: Path) -> Outcome:
        archive_path: Path | None = None
        try:
            archive_path = unique_path(
                archive_destination_for(candidate.path, self.codec.suffix),
                self.fs.exists,
            )
            self._compress(candidate, archive_path)
            relocated = self._relocate(candidate, originals_dir)
        except CandidateError as e:
            self.reporter.event(
                "candidate.failed",
                {
                    "path": str(candidate.path),
                    "kind": e.kind.name,
                    "error_type": type(e.cause).__name__,
                    "cause": str(e.cause),
                },
                level="ERROR",
            )
            # Solo se informa el comprimido si llegó a crearse
            created = e.kind not in (OutcomeKind.OPEN_ERROR, OutcomeKind.CREATE_ERROR)
            return Outcome.failure(
                candidate, e, archive_path=archive_path if created else None
            )

        self.reporter.event(
            "candidate.completed",
            {
                "path": str(candidate.path),
                "archive": str(archive_path),
                "original": str(relocated),
            },
        )
        return Outcome.success(candidate, archive_path, relocated)

    def _compress(self, candidate: Candidate, archive_path: Path) -> None:
        self.reporter.event(
            "candidate.compressing",
            {"path": str(candidate.path), "archive": str(archive_path)},
        )

        try:
            source = self.fs.open_source(candidate.path)
        except OSError as e:
            raise OpenError(candidate.path, e) from e

        with source:
            try:
                sink = self.fs.create_archive(archive_path)
            except OSError as e:
                raise CreateError(candidate.path, e) from e

            try:
                try:
                    compressor = self.codec.new_compressor()
                    while True:
                        chunk = source.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        sink.write(compressor.compress(chunk))
                except (OSError, CodecError, MemoryError) as e:
                    raise CompressionError(candidate.path, e) from e

                try:
                    sink.write(compressor.flush())
                    sink.close()
                except (OSError, CodecError, MemoryError) as e:
                    raise FinalizeError(candidate.path, e) from e
            finally:
                # Tras un fallo, el close() del parcial no debe tapar el error del paso
                with contextlib.suppress(OSError):
                    sink.close()

    def _relocate(self, candidate: Candidate, originals_dir: Path) -> Path:
        target = unique_path(
            original_target_for(candidate.path, originals_dir), self.fs.exists
        )
        self.reporter.event(
            "candidate.relocating", {"path": str(candidate.path), "target": str(target)}
        )
        try:
            self.fs.move(candidate.path, target)
        except OSError as e:
            raise MoveError(candidate.path, e) from e
        return target


class BatchCompressor:
    """
    Caso de Uso: coordinar el batch.

    - Crea la carpeta de originales ANTES de procesar (fallo fatal).
    - Reparte los candidatos en un ThreadPoolExecutor (sin estado mutable compartido).
    - Devuelve un Outcome por candidato, en orden de finalización.
    """

    def __init__(
        self,
        worker: CompressAndRelocate,
        file_system: FileSystemPort,
        reporter: ProgressReporter,
        max_workers: PositiveValue | None = None,
    ):
        self.worker = worker
        self.fs = file_system
        self.reporter = reporter
        self.max_workers = max_workers or PositiveValue(available_parallelism())

    def prepare_originals(self, originals_dir: Path) -> None:
        """Crea la carpeta de originales (idempotente). Fallo fatal."""
        try:
            self.fs.ensure_directory(originals_dir)
        except OSError as e:
            self.reporter.event(
                "originals_dir.failed",
                {"path": str(originals_dir), "cause": str(e)},
                level="ERROR",
            )
            raise DirectoryCreationError(originals_dir, e) from e

    def run(self, candidates: Sequence[Candidate], originals_dir: Path) -> list[Outcome]:
        self.prepare_originals(originals_dir)

        outcomes: list[Outcome] = []
        if not candidates:
            return outcomes

        with ThreadPoolExecutor(
            max_workers=self.max_workers.value, thread_name_prefix="compress"
        ) as executor:
            futures = [
                executor.submit(self.worker.execute, candidate, originals_dir)
                for candidate in candidates
            ]
            for future in as_completed(futures):
                outcomes.append(future.result())

        return outcomes


class ArchiveRawFiles:
    """
    Caso de Uso Principal: recorrer la entrada, seleccionar RAWs y archivarlos.
    """

    def __init__(
        self,
        file_system: FileSystemPort,
        batch: BatchCompressor,
        reporter: ProgressReporter,
        allow_list: AllowList | None = None,
    ):
        self.fs = file_system
        self.batch = batch
        self.reporter = reporter
        self.allow_list = allow_list or AllowList.default()

    def execute(self, input_dir: Path, originals_dir: Path) -> BatchSummary:
        self.reporter.event(
            "run.started",
            {
                "input": str(input_dir),
                "originals": str(originals_dir),
                "extensions": sorted(self.allow_list.extensions),
            },
        )

        # La carpeta de originales se valida antes de recorrer la entrada
        self.batch.prepare_originals(originals_dir)

        entries = self.fs.list_entries(input_dir)
        candidates = select_candidates(entries, self.allow_list)
        self.reporter.event(
            "run.candidates", {"entries": len(entries), "candidates": len(candidates)}
        )

        outcomes = self.batch.run(candidates, originals_dir)
        summary = BatchSummary(tuple(outcomes))

        self.reporter.event(
            "run.completed",
            {
                "total": summary.total,
                "succeeded": len(summary.succeeded),
                "failed": len(summary.failed),
                "by_kind": summary.counts_by_kind(),
            },
            level="WARNING" if summary.failed else "INFO",
        )
        return summary
