from __future__ import annotations

import hashlib
import os
import shutil
import tempfile
from collections.abc import Callable
from os import PathLike
from pathlib import Path
from typing import Final

from typing_extensions import override

from loguru import logger

from .file_storage import DirectoryCreationError, FileStorage
from .schemas import SavedFile


def _current_umask() -> int:
    mask = os.umask(0)
    _ = os.umask(mask)
    return mask


class LocalFileStorage(FileStorage):
    """
    Local filesystem implementation of FileStorage.

    Layout:
        base_dir/
            <name>
    """

    _CHUNK_SIZE: Final[int] = 1024 * 1024  # 1 MB
    _DIR_MODE: Final[int] = 0o777
    _FILE_MODE: Final[int] = 0o666

    def __init__(self, base_dir: str | PathLike[str]):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()
        try:
            self._base_dir.mkdir(mode=self._DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(self._base_dir) from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_path(self, name: str) -> Path:
        """
        Resolve a storage file name.
        Prevents path traversal and nested paths.
        """
        if not name or name in (".", ".."):
            raise ValueError("Invalid file name")

        resolved = (self._base_dir / name).resolve()
        if resolved.parent != self._base_dir:
            raise ValueError("Invalid file name (path traversal detected)")

        return resolved

    def _describe(self, path: Path) -> SavedFile:
        hasher = hashlib.sha256()
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(self._CHUNK_SIZE), b""):
                hasher.update(chunk)
        return SavedFile(
            name=path.name,
            size=path.stat().st_size,
            hash=hasher.hexdigest(),
        )

    # ------------------------------------------------------------------
    # Resolving
    # ------------------------------------------------------------------

    @property
    @override
    def root(self) -> Path:
        return self._base_dir

    @override
    def allocate_path(self, name: str) -> Path:
        return self._safe_path(name)

    @override
    def exists(self, name: str) -> bool:
        return self._safe_path(name).is_file()

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    @override
    def copy(self, source: str | PathLike[str], name: str) -> SavedFile:
        dst = self._safe_path(name)
        src = Path(source)
        if not src.is_file():
            raise FileNotFoundError(src)

        _ = shutil.copyfile(src, dst)
        return self._describe(dst)

    @override
    def move(self, source: str | PathLike[str], name: str) -> SavedFile:
        dst = self._safe_path(name)
        src = Path(source)
        if not src.is_file():
            raise FileNotFoundError(src)

        _ = shutil.move(src, dst)
        return self._describe(dst)

    @override
    def write_atomic(self, name: str, writer: Callable[[Path], None]) -> Path:
        dst = self._safe_path(name)
        fd, tmp_name = tempfile.mkstemp(dir=self._base_dir, prefix=f".{name}.", suffix=".tmp")
        os.close(fd)
        tmp = Path(tmp_name)

        try:
            writer(tmp)
            # mkstemp creates 0600 files; match what a plain write would get
            os.chmod(tmp, self._FILE_MODE & ~_current_umask())
            os.replace(tmp, dst)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

        return dst

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    @override
    def delete(self, name: str) -> bool:
        path = self._safe_path(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False

        logger.debug(f"Deleted {path}")
        return True
