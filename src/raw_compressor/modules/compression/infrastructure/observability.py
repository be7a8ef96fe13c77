# src/raw_compressor/modules/compression/infrastructure/observability.py
"""
Configuración centralizada de Logging y Métricas.

Principios SRE:
1. Logs estructurados para máquinas (JSON, Archivo).
2. Logs legibles para humanos (Consola).
3. Contexto (correlation id de la ejecución) en cada evento.
4. Saturación: RAM del proceso (psutil) en eventos de fallo y resumen.
"""

from __future__ import annotations

import functools
import json
import logging
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable

import psutil

# Configuración Global
LOG_FILE = os.getenv("RAW_COMPRESSOR_LOG_FILE", "raw_compressor.log")

logger = logging.getLogger("raw_compressor")


def configure_logging(level=logging.INFO, log_file: str | None = LOG_FILE):
    """
    Configura el sistema de logging con doble destino (File + Console).
    Si `log_file` es None solo se usa la consola.
    """
    # Formateador simple para consola
    console_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%H:%M:%S"
    )

    # Formateador detallado para archivo (Forensics)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(threadName)s | %(funcName)s:%(lineno)d | %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Limpiar handlers previos para evitar duplicados
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)  # Siempre capturamos todo en disco
        root_logger.addHandler(file_handler)
        logging.info(f"🔭 Observabilidad iniciada. Logs persistentes en: {log_file}")
    else:
        logging.info("🔭 Observabilidad iniciada (solo consola).")


# === Decoradores de Métricas (Instrumentation) ===


def measure_time(metric_name: str):
    """
    Decorador para medir latencia de funciones críticas.
    Principio: 'Measure what matters' - Performance.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start_time
                logging.getLogger("metrics").info(
                    f"[METRIC] {metric_name} duration={duration:.4f}s"
                )

        return wrapper

    return decorator


class ObservabilityService:
    """
    Servicio de Observabilidad SRE: Logs, Latency & Saturation (RAM).
    Soporta modo "Pretty Print" (LOG_FORMAT=PRETTY) para depuración visual.
    """

    PRETTY_PRINT = os.getenv("LOG_FORMAT") == "PRETTY"

    @staticmethod
    def get_correlation_id() -> str:
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_ram_usage_mb() -> float:
        try:
            process = psutil.Process(os.getpid())
            return round(process.memory_info().rss / 1024 / 1024, 2)
        except psutil.Error:
            return 0.0

    @staticmethod
    def log_event(
        event_name: str,
        correlation_id: str,
        payload: dict[str, Any],
        level: str = "INFO",
    ):
        """Emite un log estructurado en JSON (Horizontal o Vertical)."""
        log_entry = {
            "timestamp": time.time(),
            "level": level,
            "event": event_name,
            "correlation_id": correlation_id,
            "data": payload,
        }

        if ObservabilityService.PRETTY_PRINT:
            msg = json.dumps(log_entry, indent=4, default=str)
        else:
            msg = json.dumps(log_entry, default=str)

        if level == "ERROR":
            logger.error(msg)
        elif level == "WARNING":
            logger.warning(msg)
        elif level == "DEBUG":
            logger.debug(msg)
        else:
            logger.info(msg)

    @staticmethod
    def track_run(operation_name: str):
        """
        Instrumenta una ejecución completa de archivado.

        La función envuelta recibe `(input_dir, originals_dir, correlation_id)`
        y devuelve un BatchSummary. El mismo correlation id se comparte con
        los eventos por candidato. Al terminar se registran duración, RSS y
        totales del batch; si la ejecución aborta, el error y el RSS.
        """

        def decorator(func: Callable):
            @functools.wraps(func)
            def wrapper(input_dir: Path, originals_dir: Path):
                correlation_id = ObservabilityService.get_correlation_id()
                start = time.perf_counter()
                start_ram = ObservabilityService._get_ram_usage_mb()

                ObservabilityService.log_event(
                    f"{operation_name}.started",
                    correlation_id,
                    {
                        "input": str(input_dir),
                        "originals": str(originals_dir),
                        "ram_mb": start_ram,
                    },
                )

                try:
                    summary = func(input_dir, originals_dir, correlation_id)
                except Exception as e:
                    ObservabilityService.log_event(
                        f"{operation_name}.aborted",
                        correlation_id,
                        {
                            "duration_sec": round(time.perf_counter() - start, 3),
                            "ram_mb": ObservabilityService._get_ram_usage_mb(),
                            "error_type": type(e).__name__,
                            "error_msg": str(e),
                        },
                        level="ERROR",
                    )
                    raise

                end_ram = ObservabilityService._get_ram_usage_mb()
                ObservabilityService.log_event(
                    f"{operation_name}.finished",
                    correlation_id,
                    {
                        "duration_sec": round(time.perf_counter() - start, 3),
                        "ram_mb": end_ram,
                        "ram_delta_mb": round(end_ram - start_ram, 2),
                        "candidates": summary.total,
                        "failed": len(summary.failed),
                    },
                    level="WARNING" if summary.failed else "INFO",
                )
                return summary

            return wrapper

        return decorator


class LoggingReporter:
    """
    ProgressReporter que vuelca cada evento como JSON vía ObservabilityService.
    Un correlation id por instancia (una instancia por ejecución).
    """

    # Eventos que además registran la RAM del proceso
    RAM_EVENTS = ("candidate.failed", "run.completed")

    def __init__(self, correlation_id: str | None = None):
        self.correlation_id = correlation_id or ObservabilityService.get_correlation_id()

    def event(self, name: str, payload: dict[str, Any], level: str = "INFO") -> None:
        data = dict(payload)
        if name in self.RAM_EVENTS:
            data["ram_mb"] = ObservabilityService._get_ram_usage_mb()
        ObservabilityService.log_event(name, self.correlation_id, data, level=level)
