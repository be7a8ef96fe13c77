# src/raw_compressor/modules/compression/domain/services.py
"""
Servicios de Dominio: selección de candidatos y nombres de destino.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Reglas puras de nombrado y filtrado. La existencia en disco
se consulta a través de una función inyectada.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from .value_objects import AllowList, Candidate, FileEntry

ExistsProbe = Callable[[Path], bool]


def unique_path(candidate: Path, exists: ExistsProbe = os.path.exists) -> Path:
    """
    Devuelve una ruta que no existe en el momento de la llamada.

    Si `candidate` no existe se devuelve tal cual. Si existe, se agrega un
    sufijo numérico al stem (`foto-1.xz`, `foto-2.xz`, ...) hasta encontrar
    un hueco. Sin límite superior.

    Best-effort: la verificación no es atómica con la creación posterior.
    Es segura solo si un único escritor reclama cada prefijo de nombre.
    """
    if not exists(candidate):
        return candidate

    stem = candidate.stem
    suffix = candidate.suffix
    counter = 1
    while True:
        option = candidate.with_name(f"{stem}-{counter}{suffix}")
        if not exists(option):
            return option
        counter += 1


def select_candidates(
    entries: Iterable[FileEntry], allow_list: AllowList
) -> list[Candidate]:
    """
    Filtra las entradas a archivos regulares con extensión permitida.
    Conserva el orden de recorrido de entrada.
    """
    return [
        Candidate(entry.path)
        for entry in entries
        if entry.is_file and allow_list.matches(entry.path)
    ]


def archive_destination_for(path: Path, suffix: str) -> Path:
    """`IMG_01.CR3` -> `IMG_01.CR3.<suffix>`, junto al original."""
    return path.with_name(f"{path.name}.{suffix}")


def original_target_for(path: Path, originals_dir: Path) -> Path:
    """Re-enraíza el nombre del original bajo la carpeta de originales."""
    return originals_dir / path.name
