"""Core layer: command table, domain models and dispatch.

Rules
-----
* No ``print()`` calls.
* No filesystem, archive or psutil I/O.
* No imports from ``cli`` or ``infra``.
* Collaborators are reached only through :mod:`fskit.core.protocols`.
"""

from fskit.core.descriptor import build_command, normalize_archive_name, normalize_file_name
from fskit.core.dispatcher import Dispatcher
from fskit.core.models import (
    ArchiveAdd,
    ArchiveEmpty,
    Command,
    CreateFile,
    DeleteFile,
    DiskInfo,
    DiskRecord,
    FileContents,
    FileKind,
    RawRequest,
    ReadFile,
    Segment,
    WriteFile,
)
from fskit.core.protocols import ArchiveStore, DiskEnumerator, FileStore

__all__: list[str] = [
    "ArchiveAdd",
    "ArchiveEmpty",
    "ArchiveStore",
    "Command",
    "CreateFile",
    "DeleteFile",
    "DiskEnumerator",
    "DiskInfo",
    "DiskRecord",
    "Dispatcher",
    "FileContents",
    "FileKind",
    "FileStore",
    "RawRequest",
    "ReadFile",
    "Segment",
    "WriteFile",
    "build_command",
    "normalize_archive_name",
    "normalize_file_name",
]
