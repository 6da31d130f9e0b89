"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so the dispatcher can be exercised with recording
fakes instead of real storage.
"""

from __future__ import annotations

from typing import Protocol

from fskit.core.models import DiskRecord


class FileStore(Protocol):
    """Contract for plain-file storage backends.

    Implementations must map all backend exceptions to
    :class:`~fskit.exceptions.FskitError` subclasses:
    :class:`~fskit.exceptions.NotFoundError` for a missing path,
    :class:`~fskit.exceptions.ConflictError` for an unexpected existing
    path, and :class:`~fskit.exceptions.StorageIOError` for the rest.
    """

    def create(self, path: str) -> None:
        """Create an empty file at *path*; the path must not exist yet."""
        ...  # pragma: no cover

    def read_text(self, path: str) -> str:
        """Return the full decoded contents of *path*."""
        ...  # pragma: no cover

    def read_bytes(self, path: str) -> bytes:
        """Return the full raw contents of *path*."""
        ...  # pragma: no cover

    def append_text(self, path: str, text: str) -> None:
        """Append *text* to *path*, creating the file if absent."""
        ...  # pragma: no cover

    def delete(self, path: str) -> None:
        """Remove the file at *path*."""
        ...  # pragma: no cover


class DiskEnumerator(Protocol):
    """Contract for mounted-volume discovery backends."""

    def list_disks(self) -> list[DiskRecord]:
        """Return one record per mounted volume, in any order.

        Raises
        ------
        EnvironmentError
            When the backing library is not installed.
        StorageIOError
            When the volume table cannot be read at all.
        """
        ...  # pragma: no cover


class ArchiveStore(Protocol):
    """Contract for ZIP archive backends."""

    def exists(self, path: str) -> bool:
        ...  # pragma: no cover

    def create_empty(self, path: str) -> None:
        """Write a new archive with no entries, replacing any file at *path*."""
        ...  # pragma: no cover

    def add_entry(self, path: str, entry_name: str, data: bytes) -> None:
        """Append *data* under *entry_name* to the existing archive at *path*.

        Raises
        ------
        NotFoundError
            When no archive exists at *path*.
        ConflictError
            When *entry_name* is already present in the archive.
        StorageIOError
            When the archive is unreadable or cannot be written.
        """
        ...  # pragma: no cover
