# src/raw_compressor/modules/compression/domain/ports/reporter.py
"""
Puerto para el reporte de progreso.

Arquitectura: Domain Port (Interface)
Responsabilidad: Permitir que el núcleo emita eventos sin depender del logging global.
"""

from __future__ import annotations

from typing import Any, Protocol


class ProgressReporter(Protocol):
    """
    Sumidero de eventos estructurados.

    Implementaciones esperadas:
    - LoggingReporter (Infraestructura, JSON sobre logging)
    - InMemoryReporter (Testing)

    Debe ser seguro para llamarse desde varios threads a la vez.
    """

    def event(self, name: str, payload: dict[str, Any], level: str = "INFO") -> None:
        ...
