# src/raw_compressor/modules/compression/entry_points/cli.py
"""
Interfaz de Línea de Comandos (CLI) para el Módulo de Compresión.

Arquitectura: Interface Adapter
Responsabilidad:
    1. Parsear argumentos (argv).
    2. Instanciar el Composition Root.
    3. Traducir el resultado a códigos de salida.

Códigos de salida:
    0   Batch ejecutado (aunque haya candidatos fallidos)
    1   No se pudo crear la carpeta de originales (fatal)
    2   Directorio de entrada inválido
    3   Error inesperado
    130 Cancelado por el usuario
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from raw_compressor.modules.compression.application.use_cases import (
    ArchiveRawFiles,
    BatchCompressor,
    CompressAndRelocate,
)
from raw_compressor.modules.compression.domain.exceptions import DirectoryCreationError
from raw_compressor.modules.compression.domain.value_objects import BatchSummary
from raw_compressor.modules.compression.infrastructure.adapters import (
    LocalFileSystemAdapter,
    XzArchiveCodec,
)
from raw_compressor.modules.compression.infrastructure.observability import (
    LOG_FILE,
    LoggingReporter,
    ObservabilityService,
    configure_logging,
)

logger = logging.getLogger("raw_compressor.cli")


def setup_parser() -> argparse.ArgumentParser:
    """Configura los argumentos aceptados por la herramienta."""
    parser = argparse.ArgumentParser(
        prog="raw-compressor",
        description="📷 RAW Compressor - Comprime archivos RAW a .xz y aparta los originales",
        epilog="Ejemplo: raw-compressor --input ./fotos --originals ./originales",
    )

    parser.add_argument(
        "--input", "-i", type=Path, required=True, help="Directorio de entrada a recorrer"
    )
    parser.add_argument(
        "--originals",
        "-o",
        type=Path,
        required=True,
        help="Directorio al que se mueven los originales",
    )
    parser.add_argument(
        "--log-file",
        default=LOG_FILE,
        help=f"Archivo de log persistente (default: {LOG_FILE})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Muestra logs de depuración en consola",
    )

    return parser


def format_summary(summary: BatchSummary) -> None:
    """Presentación amigable para humanos."""
    print(f"\n📊 ARCHIVADO COMPLETADO: {summary.total} candidatos")
    print("=" * 60)
    print(f"{'ESTADO':<20} | {'ARCHIVO'}")
    print("-" * 60)

    for outcome in summary.outcomes:
        icon = "🟢" if outcome.ok else "🔴"
        print(f"{icon} {outcome.kind.name:<17} | {outcome.candidate.path}")
        if outcome.error is not None:
            print(f"   ↳ {outcome.error.cause}")

    print("=" * 60)
    print(f"Correctos: {len(summary.succeeded)} | Fallidos: {len(summary.failed)}")


@ObservabilityService.track_run(operation_name="archive_raw_files")
def run(input_dir: Path, originals_dir: Path, correlation_id: str) -> BatchSummary:
    """Composition Root (Wiring) + ejecución."""
    fs = LocalFileSystemAdapter()
    reporter = LoggingReporter(correlation_id)
    worker = CompressAndRelocate(fs, XzArchiveCodec(), reporter)
    batch = BatchCompressor(worker, fs, reporter)
    return ArchiveRawFiles(fs, batch, reporter).execute(input_dir, originals_dir)


def main(argv: list[str] | None = None) -> int:
    args = setup_parser().parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file or None,
    )
    logger.info("Iniciando raw-compressor")

    # 1. Validación de Presentación
    if not args.input.is_dir():
        print(f"❌ Error: el directorio '{args.input}' no existe.", file=sys.stderr)
        return 2

    try:
        summary = run(args.input, args.originals)
    except DirectoryCreationError as e:
        logger.error(str(e))
        print(f"❌ Error fatal: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n⚠️  Operación cancelada por el usuario.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.exception("Error inesperado")
        print(f"❌ Error Crítico: {e}", file=sys.stderr)
        return 3

    format_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
