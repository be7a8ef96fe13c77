# tests/e2e/test_archive_e2e.py
"""
Tests End-to-End (E2E) para el pipeline de archivado.
Objetivo: Validar los escenarios completos sobre disco real con el wiring de producción.
"""

import lzma

import pytest

from raw_compressor.core.value_objects import PositiveValue
from raw_compressor.modules.compression.application.use_cases import (
    ArchiveRawFiles,
    BatchCompressor,
    CompressAndRelocate,
)
from raw_compressor.modules.compression.domain.exceptions import DirectoryCreationError
from raw_compressor.modules.compression.domain.value_objects import OutcomeKind
from raw_compressor.modules.compression.infrastructure.adapters import (
    InMemoryReporter,
    LocalFileSystemAdapter,
    XzArchiveCodec,
)


def _pipeline(fs=None, reporter=None, workers=None):
    fs = fs or LocalFileSystemAdapter()
    reporter = reporter or InMemoryReporter()
    worker = CompressAndRelocate(fs, XzArchiveCodec(), reporter)
    batch = BatchCompressor(worker, fs, reporter, max_workers=workers)
    return ArchiveRawFiles(fs, batch, reporter)


def test_scenario_a_compresses_raw_and_leaves_other_files(tmp_path, raw_tree):
    """
    Escenario A: img1.CR3 + note.txt, la carpeta de originales no existe.
    """
    inputs = raw_tree({"img1.CR3": b"canon-raw" * 1000, "note.txt": b"hola"})
    originals = tmp_path / "originals"

    summary = _pipeline().execute(inputs, originals)

    assert originals.is_dir()
    assert (originals / "img1.CR3").read_bytes() == b"canon-raw" * 1000
    assert not (inputs / "img1.CR3").exists()
    archive = inputs / "img1.CR3.xz"
    assert lzma.decompress(archive.read_bytes()) == b"canon-raw" * 1000
    assert (inputs / "note.txt").read_bytes() == b"hola"
    assert not (inputs / "note.txt.xz").exists()
    assert summary.total == 1
    assert summary.succeeded[0].archive_path == archive


def test_scenario_b_existing_archive_is_not_overwritten(tmp_path, raw_tree):
    """
    Escenario B: ya existe photo.raw.xz; el nuevo comprimido recibe el sufijo -1.
    """
    inputs = raw_tree({"photo.raw": b"new-photo", "photo.raw.xz": b"previous archive"})
    originals = tmp_path / "originals"

    summary = _pipeline().execute(inputs, originals)

    assert (inputs / "photo.raw.xz").read_bytes() == b"previous archive"
    created = inputs / "photo.raw-1.xz"
    assert lzma.decompress(created.read_bytes()) == b"new-photo"
    assert summary.succeeded[0].archive_path == created


def test_scenario_c_originals_dir_cannot_be_created(tmp_path, raw_tree):
    """
    Escenario C: la ruta de originales es un archivo regular -> error fatal.
    """
    inputs = raw_tree({"a.nef": b"1", "b.CR3": b"2"})
    originals = tmp_path / "originals"
    originals.write_bytes(b"not a directory")
    reporter = InMemoryReporter()

    with pytest.raises(DirectoryCreationError):
        _pipeline(reporter=reporter).execute(inputs, originals)

    assert sorted(p.name for p in inputs.iterdir()) == ["a.nef", "b.CR3"]
    assert not any(p.suffix == ".xz" for p in inputs.rglob("*"))
    assert reporter.of("candidate.compressing") == []


@pytest.mark.parametrize("workers", [1, 4])
def test_failure_isolation_one_unreadable_candidate(
    tmp_path, raw_tree, flaky_fs_factory, workers
):
    """
    N candidatos, el K-ésimo ilegible: N-1 éxitos y exactamente un OPEN_ERROR.
    """
    files = {f"dir{i % 3}/IMG_{i:03d}.CR3": f"raw-{i}".encode() * 500 for i in range(8)}
    inputs = raw_tree(files)
    broken = inputs / "dir1" / "IMG_004.CR3"
    originals = tmp_path / "originals"

    summary = _pipeline(
        fs=flaky_fs_factory(fail_open=[broken]), workers=PositiveValue(workers)
    ).execute(inputs, originals)

    assert summary.total == 8
    assert len(summary.succeeded) == 7
    assert [o.kind for o in summary.failed] == [OutcomeKind.OPEN_ERROR]
    assert summary.failed[0].candidate.path == broken
    assert broken.exists()
    assert not broken.with_name("IMG_004.CR3.xz").exists()
    assert len(list(originals.iterdir())) == 7


def test_same_name_in_different_dirs_do_not_collide_in_originals(tmp_path, raw_tree):
    inputs = raw_tree({"day1/DSC_0001.NEF": b"one", "day2/DSC_0001.NEF": b"two"})
    originals = tmp_path / "originals"

    summary = _pipeline(workers=PositiveValue(1)).execute(inputs, originals)

    assert len(summary.succeeded) == 2
    moved = sorted(p.name for p in originals.iterdir())
    assert moved == ["DSC_0001-1.NEF", "DSC_0001.NEF"]
    contents = {p.read_bytes() for p in originals.iterdir()}
    assert contents == {b"one", b"two"}
