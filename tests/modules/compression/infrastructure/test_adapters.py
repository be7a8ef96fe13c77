# tests/modules/compression/infrastructure/test_adapters.py
"""
Tests de Integración para Adaptadores de Infraestructura.
Requieren acceso a disco (usamos tmp_path).
"""

import lzma
import os
import threading
from unittest.mock import patch

import pytest

from raw_compressor.modules.compression.domain.exceptions import CodecError
from raw_compressor.modules.compression.infrastructure.adapters import (
    XZ_PRESET,
    InMemoryReporter,
    LocalFileSystemAdapter,
    XzArchiveCodec,
)

ADAPTERS = "raw_compressor.modules.compression.infrastructure.adapters"

# === LocalFileSystemAdapter ===


def test_list_entries_is_recursive_and_depth_first(raw_tree):
    root = raw_tree(
        {
            "a.CR3": b"1",
            "b_dir/c.nef": b"2",
            "b_dir/d_dir/e.raw": b"3",
            "z.txt": b"4",
        }
    )
    fs = LocalFileSystemAdapter()

    entries = fs.list_entries(root)
    rel = [(str(e.path.relative_to(root)), e.is_file) for e in entries]

    assert rel == [
        ("a.CR3", True),
        ("b_dir", False),
        (os.path.join("b_dir", "c.nef"), True),
        (os.path.join("b_dir", "d_dir"), False),
        (os.path.join("b_dir", "d_dir", "e.raw"), True),
        ("z.txt", True),
    ]
    assert all(e.path.is_absolute() for e in entries)


def test_list_entries_does_not_follow_symlinks(raw_tree, tmp_path):
    root = raw_tree({"real.nef": b"data"})
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "hidden.nef").write_bytes(b"x")
    os.symlink(root / "real.nef", root / "link.nef")
    os.symlink(outside, root / "linked_dir")

    entries = {e.path.name: e.is_file for e in LocalFileSystemAdapter().list_entries(root)}

    assert entries == {"link.nef": False, "linked_dir": False, "real.nef": True}


def test_list_entries_missing_root_returns_empty(tmp_path):
    assert LocalFileSystemAdapter().list_entries(tmp_path / "nope") == []


def test_move_and_ensure_directory(tmp_path):
    fs = LocalFileSystemAdapter()
    target_dir = tmp_path / "x" / "y"
    fs.ensure_directory(target_dir)
    fs.ensure_directory(target_dir)  # idempotente

    source = tmp_path / "a.nef"
    source.write_bytes(b"abc")
    fs.move(source, target_dir / "a.nef")

    assert not source.exists()
    assert (target_dir / "a.nef").read_bytes() == b"abc"
    assert fs.exists(target_dir / "a.nef")


def test_ensure_directory_over_file_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_bytes(b"")
    with pytest.raises(OSError):
        LocalFileSystemAdapter().ensure_directory(blocker)


# === XzArchiveCodec ===


def test_xz_codec_streams_a_single_valid_xz_stream():
    codec = XzArchiveCodec()
    compressor = codec.new_compressor()
    data = os.urandom(1000) + b"A" * 200_000

    out = b"".join(compressor.compress(data[i : i + 4096]) for i in range(0, len(data), 4096))
    out += compressor.flush()

    assert codec.suffix == "xz"
    assert codec.preset == XZ_PRESET == 6
    assert out.startswith(b"\xfd7zXZ\x00")
    assert lzma.decompress(out, format=lzma.FORMAT_XZ) == data


def test_xz_codec_compressors_are_independent():
    codec = XzArchiveCodec()
    assert codec.new_compressor() is not codec.new_compressor()


# === InMemoryReporter ===


def test_in_memory_reporter_is_thread_safe():
    reporter = InMemoryReporter()

    def emit(n):
        for i in range(200):
            reporter.event("tick", {"worker": n, "i": i})

    threads = [threading.Thread(target=emit, args=(n,)) for n in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(reporter.of("tick")) == 1000


def test_xz_codec_construction_failure_is_a_codec_error():
    codec = XzArchiveCodec()
    with patch(f"{ADAPTERS}.lzma.LZMACompressor", side_effect=MemoryError("no dict")):
        with pytest.raises(CodecError, match="inicializar"):
            codec.new_compressor()
