"""Core dispatcher: routes one validated command to one collaborator call.

The dispatcher depends on three collaborators injected at construction
time (:class:`~fskit.core.protocols.FileStore`,
:class:`~fskit.core.protocols.DiskEnumerator`,
:class:`~fskit.core.protocols.ArchiveStore`).  It is responsible for:

* Validating raw requests through the command descriptor.
* Calling exactly one capability per command.
* Tagging every failure with the operation name and its target.
* Ensuring only :class:`~fskit.exceptions.FskitError` subclasses escape.

Guarantees
----------
* No ``print()``; outcomes are returned to the CLI layer for rendering.
* No filesystem, ZIP or psutil imports.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from fskit.core.descriptor import ARCHIVE_EMPTY_OVERWRITES, build_command
from fskit.core.models import (
    ArchiveAdd,
    ArchiveEmpty,
    Command,
    CreateFile,
    DeleteFile,
    DiskInfo,
    DiskRecord,
    FileContents,
    RawRequest,
    ReadFile,
    WriteFile,
)
from fskit.core.protocols import ArchiveStore, DiskEnumerator, FileStore
from fskit.exceptions import ConflictError, FskitError, NotFoundError, StorageIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Outcome = DiskRecord | FileContents | None


def select_disk(records: list[DiskRecord], name: str) -> DiskRecord | None:
    """Return the first record, by mount point, whose mount contains ``name.upper()``.

    Sorting first makes the choice independent of enumeration order.
    """
    needle = name.upper()
    for record in sorted(records, key=lambda rec: rec.mount_point):
        if needle in record.mount_point:
            return record
    return None


class Dispatcher:
    """Stateless router from commands to collaborator calls.

    Parameters
    ----------
    files:
        Any object satisfying the :class:`FileStore` protocol.
    disks:
        Any object satisfying the :class:`DiskEnumerator` protocol.
    archives:
        Any object satisfying the :class:`ArchiveStore` protocol.
    """

    def __init__(
        self,
        files: FileStore,
        disks: DiskEnumerator,
        archives: ArchiveStore,
    ) -> None:
        self._files: FileStore = files
        self._disks: DiskEnumerator = disks
        self._archives: ArchiveStore = archives
        self._handlers: dict[type, Callable[[Any], Outcome]] = {
            DiskInfo: self.disk_info,
            CreateFile: self.create_file,
            ReadFile: self.read_file,
            WriteFile: self.write_file,
            DeleteFile: self.delete_file,
            ArchiveEmpty: self.archive_empty,
            ArchiveAdd: self.archive_add,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch_request(self, raw: RawRequest) -> Outcome:
        """Validate *raw* and dispatch it.

        Raises
        ------
        UsageError
            Before any collaborator is called, when *raw* is not in the
            command table.
        """
        return self.dispatch(build_command(raw))

    def dispatch(self, command: Command) -> Outcome:
        """Run the single collaborator call that *command* describes."""
        handler = self._handlers[type(command)]
        logger.debug("Dispatching %r", command)
        return handler(command)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def disk_info(self, command: DiskInfo) -> DiskRecord:
        records = self._call("disk_info", command.name, self._disks.list_disks)
        logger.debug("Enumerated %d volume(s)", len(records))
        record = select_disk(records, command.name)
        if record is None:
            raise NotFoundError(
                "No such disk!",
                hint="Run with a substring of a mount point, e.g. 'C' or '/'.",
                operation="disk_info",
                target=command.name,
            )
        return record

    def create_file(self, command: CreateFile) -> None:
        self._call("create_file", command.path, self._files.create, command.path)
        logger.info("Created %s file %s", command.kind.value, command.path)

    def read_file(self, command: ReadFile) -> FileContents:
        text = self._call("read_file", command.path, self._files.read_text, command.path)
        return FileContents(path=command.path, text=text)

    def write_file(self, command: WriteFile) -> None:
        self._call(
            "write_file", command.path, self._files.append_text, command.path, command.text,
        )
        logger.info("Appended %d character(s) to %s", len(command.text), command.path)

    def delete_file(self, command: DeleteFile) -> None:
        self._call("delete_file", command.path, self._files.delete, command.path)
        logger.info("Deleted %s", command.path)

    def archive_empty(self, command: ArchiveEmpty) -> None:
        path = command.archive_path
        if self._call("archive_empty", path, self._archives.exists, path):
            if not ARCHIVE_EMPTY_OVERWRITES:
                raise ConflictError("Archive already exists.", operation="archive_empty", target=path)
            logger.warning("Overwriting existing archive %s", path)
        self._call("archive_empty", path, self._archives.create_empty, path)

    def archive_add(self, command: ArchiveAdd) -> None:
        path = command.archive_path
        if not self._call("archive_add", path, self._archives.exists, path):
            raise NotFoundError(
                "Archive does not exist.",
                hint=f"Create it first: fskit --segment archive --action empty --archive-name {path}",
                operation="archive_add",
                target=path,
            )
        data = self._call("archive_add", command.name, self._files.read_bytes, command.name)
        self._call("archive_add", path, self._archives.add_entry, path, command.name, data)
        logger.info("Stored %s (%d bytes) in %s", command.name, len(data), path)

    # ------------------------------------------------------------------
    # Collaborator delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(operation: str, target: str, func: Callable[..., T], *args: Any) -> T:
        """Invoke *func* and ensure only tagged fskit errors escape."""
        try:
            return func(*args)
        except FskitError as exc:
            # Already one of ours; attach context and propagate.
            if exc.operation is None:
                exc.operation = operation
            if exc.target is None:
                exc.target = target
            raise
        except Exception as exc:
            raise StorageIOError(
                f"Unexpected collaborator error: {exc}",
                operation=operation,
                target=target,
            ) from exc
