# src/raw_compressor/modules/compression/__init__.py
"""
Módulo de Compresión de archivos RAW.
"""

from __future__ import annotations

# Application
from .application.use_cases import ArchiveRawFiles, BatchCompressor, CompressAndRelocate

# Domain
from .domain.exceptions import (
    CandidateError,
    CompressionError,
    CompressionPipelineError,
    CreateError,
    DirectoryCreationError,
    FinalizeError,
    MoveError,
    OpenError,
)
from .domain.services import select_candidates, unique_path
from .domain.value_objects import (
    AllowList,
    BatchSummary,
    Candidate,
    FileEntry,
    Outcome,
    OutcomeKind,
)

# Infrastructure
from .infrastructure.adapters import (
    InMemoryReporter,
    LocalFileSystemAdapter,
    XzArchiveCodec,
)
from .infrastructure.observability import LoggingReporter

__all__ = [
    "AllowList",
    "BatchSummary",
    "Candidate",
    "FileEntry",
    "Outcome",
    "OutcomeKind",
    "select_candidates",
    "unique_path",
    "CompressionPipelineError",
    "CandidateError",
    "OpenError",
    "CreateError",
    "CompressionError",
    "FinalizeError",
    "MoveError",
    "DirectoryCreationError",
    "CompressAndRelocate",
    "BatchCompressor",
    "ArchiveRawFiles",
    "LocalFileSystemAdapter",
    "XzArchiveCodec",
    "InMemoryReporter",
    "LoggingReporter",
]
