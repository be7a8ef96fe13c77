# tests/conftest.py
import errno
import io
import os
from pathlib import Path

import pytest

from raw_compressor.modules.compression.infrastructure.adapters import (
    LocalFileSystemAdapter,
)


class FlakyFileSystem(LocalFileSystemAdapter):
    """
    Adaptador local con fallos inyectables por ruta.
    Corremos como root en CI, así que chmod 000 no basta para simular
    archivos ilegibles: los fallos se inyectan aquí.
    """

    def __init__(self, fail_open=(), fail_create=(), fail_move=(), fail_read=()):
        self.fail_open = {Path(p) for p in fail_open}
        self.fail_create = {Path(p) for p in fail_create}
        self.fail_move = {Path(p) for p in fail_move}
        self.fail_read = {Path(p) for p in fail_read}
        self.created: list[Path] = []
        self.moved: list[tuple[Path, Path]] = []

    def open_source(self, path):
        if Path(path) in self.fail_open:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        if Path(path) in self.fail_read:
            with open(path, "rb") as f:
                return _BrokenReader(f.read())
        return super().open_source(path)

    def create_archive(self, path):
        if Path(path).with_suffix("") in self.fail_create or Path(path) in self.fail_create:
            raise OSError(errno.ENOSPC, "No space left on device", str(path))
        self.created.append(Path(path))
        return super().create_archive(path)

    def move(self, source, target):
        if Path(source) in self.fail_move:
            raise OSError(errno.EXDEV, "Invalid cross-device link", str(source))
        self.moved.append((Path(source), Path(target)))
        super().move(source, target)


class _BrokenReader(io.BytesIO):
    """Entrega el primer bloque y falla en la siguiente lectura."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self._reads = 0

    def read(self, size=-1):
        self._reads += 1
        if self._reads > 1:
            raise OSError(errno.EIO, "Input/output error")
        return super().read(size)


@pytest.fixture
def flaky_fs_factory():
    return FlakyFileSystem


@pytest.fixture
def raw_tree(tmp_path):
    """
    Factory para poblar un directorio de entrada con archivos dummy.
    Uso: raw_tree({"a.CR3": b"...", "sub/b.nef": b"..."})
    """

    def _create(files: dict[str, bytes], root: str = "inputs") -> Path:
        base = tmp_path / root
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = base / rel
            os.makedirs(path.parent, exist_ok=True)
            path.write_bytes(content)
        return base

    return _create
