"""
FileStorage Protocol - interface for the flat directory that holds renditions
and plain uploads.

Design goals:
- Keep storage as the single authority over paths
- Support filesystem-bound libraries (PIL needs file names)
- Never expose a partially written file under its final name
"""

from __future__ import annotations

from collections.abc import Callable
from os import PathLike
from pathlib import Path
from typing import Protocol, runtime_checkable

from .schemas import SavedFile


class StorageError(Exception):
    """Base class for storage-related errors."""


class DirectoryCreationError(StorageError):
    def __init__(self, directory: str | PathLike[str]):
        self.directory: str = str(directory)
        super().__init__(f"Failed to create storage directory '{directory}'")


@runtime_checkable
class FileStorage(Protocol):
    """
    Protocol for a flat, directory-scoped file store.

    Implementations own:
    - storage root
    - permissions
    - file lifecycle

    Callers interact ONLY via plain file names.
    """

    @property
    def root(self) -> Path: ...

    def allocate_path(self, name: str) -> Path:
        """
        Resolve the path a file named ``name`` will live at.

        Intended for libraries that require file names (PIL).
        """
        ...

    def copy(self, source: str | PathLike[str], name: str) -> SavedFile:
        """Copy an existing file into storage byte for byte."""
        ...

    def move(self, source: str | PathLike[str], name: str) -> SavedFile:
        """Move an existing file (e.g. an upload's temp file) into storage."""
        ...

    def write_atomic(self, name: str, writer: Callable[[Path], None]) -> Path:
        """
        Let ``writer`` produce the file at a temporary path, then rename it
        into place.
        """
        ...

    def exists(self, name: str) -> bool: ...

    def delete(self, name: str) -> bool:
        """
        Remove a stored file.

        Returns:
            True if a file was removed, False if there was nothing to remove.
        """
        ...
