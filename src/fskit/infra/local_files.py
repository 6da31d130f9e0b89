"""Local-filesystem implementation of :class:`~fskit.core.protocols.FileStore`.

Every ``OSError`` raised by the standard library is caught here and
re-raised as a typed :class:`~fskit.exceptions.FskitError` subclass;
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fskit.config import DEFAULT_ENCODING
from fskit.exceptions import ConflictError, NotFoundError, StorageIOError

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Concrete :class:`FileStore` backed by :mod:`pathlib`.

    Relative paths resolve against the current working directory, the
    same way the shell that launched fskit would resolve them.

    This class satisfies the :class:`~fskit.core.protocols.FileStore`
    protocol structurally; no explicit inheritance required.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self._encoding: str = encoding

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def create(self, path: str) -> None:
        """Create an empty file; fail if anything already exists at *path*."""
        try:
            with open(path, "xb"):
                pass
        except FileExistsError as exc:
            raise ConflictError(
                "File already exists.",
                hint="Use --action write to append, or delete it first.",
            ) from exc
        except FileNotFoundError as exc:
            raise NotFoundError("Parent directory does not exist.") from exc
        except OSError as exc:
            raise StorageIOError(self._describe(exc)) from exc

    def read_bytes(self, path: str) -> bytes:
        target = Path(path)
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError("File does not exist.") from exc
        except IsADirectoryError as exc:
            raise StorageIOError("Path is a directory, not a file.") from exc
        except OSError as exc:
            raise StorageIOError(self._describe(exc)) from exc

    def read_text(self, path: str) -> str:
        data = self.read_bytes(path)
        try:
            return data.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise StorageIOError(
                f"Contents are not valid {self._encoding} text.",
                hint="Set FSKIT_ENCODING to the file's encoding.",
            ) from exc

    def append_text(self, path: str, text: str) -> None:
        try:
            payload = text.encode(self._encoding)
        except UnicodeEncodeError as exc:
            raise StorageIOError(f"Text cannot be encoded as {self._encoding}.") from exc

        try:
            with open(path, "ab") as handle:
                handle.write(payload)
        except FileNotFoundError as exc:
            raise NotFoundError("Parent directory does not exist.") from exc
        except OSError as exc:
            raise StorageIOError(self._describe(exc)) from exc
        logger.debug("Wrote %d byte(s) to %s", len(payload), path)

    def delete(self, path: str) -> None:
        target = Path(path)
        try:
            target.unlink()
        except FileNotFoundError as exc:
            raise NotFoundError("File does not exist.") from exc
        except IsADirectoryError as exc:
            raise StorageIOError("Path is a directory, not a file.") from exc
        except OSError as exc:
            raise StorageIOError(self._describe(exc)) from exc

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _describe(exc: OSError) -> str:
        """Return the OS reason without the repeated file name."""
        return exc.strerror or str(exc)
