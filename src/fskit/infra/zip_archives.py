"""ZIP implementation of :class:`~fskit.core.protocols.ArchiveStore`.

This module is the **only** place in the codebase that imports
:mod:`zipfile`.  Archive handles are always opened in ``with`` blocks
so the central directory is written (or the handle released) on every
exit path.
"""

from __future__ import annotations

import logging
import stat
import time
import zipfile
from pathlib import Path

from fskit.exceptions import ConflictError, NotFoundError, StorageIOError

logger = logging.getLogger(__name__)

ENTRY_PERMISSIONS: int = 0o755
"""Unix permission bits recorded on every stored entry."""

_UNIX_SYSTEM: int = 3


class ZipArchiveStore:
    """Concrete :class:`ArchiveStore` backed by :mod:`zipfile`.

    Entries are written uncompressed (``ZIP_STORED``) with fixed
    ``rwxr-xr-x`` regular-file permissions.

    This class satisfies the :class:`~fskit.core.protocols.ArchiveStore`
    protocol structurally; no explicit inheritance required.
    """

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def create_empty(self, path: str) -> None:
        """Write an archive with no entries, truncating any file at *path*."""
        try:
            with zipfile.ZipFile(path, mode="w"):
                pass
        except FileNotFoundError as exc:
            raise NotFoundError("Parent directory does not exist.") from exc
        except OSError as exc:
            raise StorageIOError(exc.strerror or str(exc)) from exc
        logger.debug("Wrote empty archive %s", path)

    def add_entry(self, path: str, entry_name: str, data: bytes) -> None:
        """Append *data* as *entry_name*; the archive must already exist."""
        if not self.exists(path):
            raise NotFoundError("Archive does not exist.")
        # Append mode would silently tack a new archive onto a non-ZIP file.
        if not zipfile.is_zipfile(path):
            raise StorageIOError("Not a valid ZIP archive.")

        info = self.build_entry_info(entry_name)
        try:
            with zipfile.ZipFile(path, mode="a") as archive:
                # ZipInfo rewrites os.sep to "/" and drops anything after a NUL.
                if info.filename in archive.namelist():
                    raise ConflictError(
                        f"Entry '{entry_name}' is already in the archive.",
                        hint="Create a new archive with --action empty to start over.",
                    )
                archive.writestr(info, data)
        except zipfile.BadZipFile as exc:
            raise StorageIOError(
                f"Not a valid ZIP archive: {exc}",
            ) from exc
        except OSError as exc:
            raise StorageIOError(exc.strerror or str(exc)) from exc
        logger.debug("Appended %s (%d bytes) to %s", entry_name, len(data), path)

    # ------------------------------------------------------------------
    # Entry metadata
    # ------------------------------------------------------------------

    @staticmethod
    def build_entry_info(entry_name: str) -> zipfile.ZipInfo:
        """Return the header for a stored, ``0o755`` regular-file entry."""
        info = zipfile.ZipInfo(entry_name, date_time=time.localtime()[:6])
        info.compress_type = zipfile.ZIP_STORED
        info.create_system = _UNIX_SYSTEM
        info.external_attr = (stat.S_IFREG | ENTRY_PERMISSIONS) << 16
        return info
