"""Domain models for fskit.

All models are **frozen** dataclasses or enums; immutable value
objects with no behaviour beyond data access and trivial derivations.
They carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GIB: int = 1024**3
"""Bytes per gibibyte; disk capacities are reported in this unit."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Segment(str, Enum):
    """Top-level operation family a request targets."""

    DISK = "disk"
    FILE = "file"
    ARCHIVE = "archive"


class FileKind(str, Enum):
    """File flavour; decides the suffix applied during normalization."""

    PLAIN = "plain"
    JSON = "json"
    XML = "xml"


# ---------------------------------------------------------------------------
# Raw request (as parsed from the command line)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RawRequest:
    """Every flag the CLI accepts, before validation.

    Nothing downstream of the command descriptor ever sees this type;
    it is turned into one of the :data:`Command` variants or rejected.
    """

    segment: Segment | None
    action: str | None
    file_kind: FileKind | None = None
    name: str | None = None
    archive_name: str | None = None
    text: str | None = None


# ---------------------------------------------------------------------------
# Validated command variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DiskInfo:
    """Report capacity for the first volume matching *name*."""

    name: str


@dataclass(frozen=True, slots=True)
class CreateFile:
    """Create an empty file; *path* is already normalized."""

    kind: FileKind
    path: str


@dataclass(frozen=True, slots=True)
class ReadFile:
    kind: FileKind
    path: str


@dataclass(frozen=True, slots=True)
class WriteFile:
    """Append *text* to *path*, creating the file when absent."""

    kind: FileKind
    path: str
    text: str


@dataclass(frozen=True, slots=True)
class DeleteFile:
    kind: FileKind
    path: str


@dataclass(frozen=True, slots=True)
class ArchiveEmpty:
    """Create a fresh, empty ZIP at *archive_path*."""

    archive_path: str


@dataclass(frozen=True, slots=True)
class ArchiveAdd:
    """Store the file at *name* inside *archive_path* under entry *name*."""

    archive_path: str
    name: str


Command = DiskInfo | CreateFile | ReadFile | WriteFile | DeleteFile | ArchiveEmpty | ArchiveAdd
"""Union of every shape the dispatcher accepts."""


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DiskRecord:
    """One mounted volume as reported by the disk enumerator."""

    name: str
    """Device name (e.g. ``/dev/sda1`` or ``C:\\``)."""

    file_system: str
    """Filesystem type label (e.g. ``ext4``, ``NTFS``)."""

    available_bytes: int
    total_bytes: int

    mount_point: str
    """Mount path; this is what disk lookups match against."""

    @property
    def available_gib(self) -> float:
        return self.available_bytes / GIB

    @property
    def total_gib(self) -> float:
        return self.total_bytes / GIB


@dataclass(frozen=True, slots=True)
class FileContents:
    """Result of a read: the normalized path and its decoded text."""

    path: str
    text: str
