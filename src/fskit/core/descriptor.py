"""Command descriptor: the declarative table of legal requests.

Every function in this module is a **pure** transformation: no I/O, no
side effects, fully deterministic.

Table
-----
=========  ===============================  ========================  ===========================
Segment    Action                           Required                  Forbidden
=========  ===============================  ========================  ===========================
disk       info                             name                      file_type, archive_name
file       create / read / write / delete   file_type, name           archive_name
archive    empty                            archive_name              file_type, name, text
archive    archive                          archive_name, name        file_type, text
=========  ===============================  ========================  ===========================

``file write`` additionally requires ``text``.  Fields that are neither
required nor forbidden are accepted and ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from fskit.core.models import (
    ArchiveAdd,
    ArchiveEmpty,
    Command,
    CreateFile,
    DeleteFile,
    DiskInfo,
    FileKind,
    RawRequest,
    ReadFile,
    Segment,
    WriteFile,
)
from fskit.exceptions import UsageError

ARCHIVE_SUFFIX: str = ".zip"

ARCHIVE_EMPTY_OVERWRITES: bool = True
"""``archive empty`` replaces any existing file at the archive path."""

_KIND_SUFFIXES: dict[FileKind, str] = {
    FileKind.JSON: ".json",
    FileKind.XML: ".xml",
}

# Flag names as the user typed them, keyed by RawRequest attribute.
FLAG_NAMES: dict[str, str] = {
    "file_kind": "--file-type",
    "name": "--name",
    "archive_name": "--archive-name",
    "text": "--text",
}


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_file_name(kind: FileKind, name: str) -> str:
    """Return the storage path for *name* under *kind*.

    JSON and XML names gain their suffix unless it already appears
    anywhere in the name; plain names pass through unchanged.  The rule
    is idempotent.
    """
    suffix = _KIND_SUFFIXES.get(kind)
    if suffix is None or suffix in name:
        return name
    return name + suffix


def normalize_archive_name(archive_name: str) -> str:
    """Return *archive_name* with ``.zip`` appended unless already present."""
    if ARCHIVE_SUFFIX in archive_name:
        return archive_name
    return archive_name + ARCHIVE_SUFFIX


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandRule:
    """Field-presence contract and command builder for one action."""

    segment: Segment
    action: str
    required: frozenset[str]
    forbidden: frozenset[str]
    build: Callable[[RawRequest], Command]
    usage: str
    """Example invocation shown as a hint when the rule is violated."""


def _value(raw: RawRequest, field: str) -> str:
    """Return a field the rule has already checked for presence."""
    value = getattr(raw, field)
    if value is None:
        raise UsageError(f"{FLAG_NAMES[field]} is required.")
    return value


def _kind(raw: RawRequest) -> FileKind:
    if raw.file_kind is None:
        raise UsageError("--file-type is required.")
    return raw.file_kind


def _file_path(raw: RawRequest) -> str:
    return normalize_file_name(_kind(raw), _value(raw, "name"))


def _build_disk_info(raw: RawRequest) -> Command:
    return DiskInfo(name=_value(raw, "name"))


def _build_create(raw: RawRequest) -> Command:
    return CreateFile(kind=_kind(raw), path=_file_path(raw))


def _build_read(raw: RawRequest) -> Command:
    return ReadFile(kind=_kind(raw), path=_file_path(raw))


def _build_write(raw: RawRequest) -> Command:
    return WriteFile(kind=_kind(raw), path=_file_path(raw), text=_value(raw, "text"))


def _build_delete(raw: RawRequest) -> Command:
    return DeleteFile(kind=_kind(raw), path=_file_path(raw))


def _build_archive_empty(raw: RawRequest) -> Command:
    return ArchiveEmpty(archive_path=normalize_archive_name(_value(raw, "archive_name")))


def _build_archive_add(raw: RawRequest) -> Command:
    return ArchiveAdd(
        archive_path=normalize_archive_name(_value(raw, "archive_name")),
        name=_value(raw, "name"),
    )


_FILE_USAGE: str = "fskit --segment file --action {action} --file-type {{plain|json|xml}} --name NAME"

_RULE_LIST: tuple[CommandRule, ...] = (
    CommandRule(
        segment=Segment.DISK,
        action="info",
        required=frozenset({"name"}),
        forbidden=frozenset({"file_kind", "archive_name"}),
        build=_build_disk_info,
        usage="fskit --segment disk --action info --name NAME",
    ),
    CommandRule(
        segment=Segment.FILE,
        action="create",
        required=frozenset({"file_kind", "name"}),
        forbidden=frozenset({"archive_name"}),
        build=_build_create,
        usage=_FILE_USAGE.format(action="create"),
    ),
    CommandRule(
        segment=Segment.FILE,
        action="read",
        required=frozenset({"file_kind", "name"}),
        forbidden=frozenset({"archive_name"}),
        build=_build_read,
        usage=_FILE_USAGE.format(action="read"),
    ),
    CommandRule(
        segment=Segment.FILE,
        action="write",
        required=frozenset({"file_kind", "name", "text"}),
        forbidden=frozenset({"archive_name"}),
        build=_build_write,
        usage=_FILE_USAGE.format(action="write") + " --text TEXT",
    ),
    CommandRule(
        segment=Segment.FILE,
        action="delete",
        required=frozenset({"file_kind", "name"}),
        forbidden=frozenset({"archive_name"}),
        build=_build_delete,
        usage=_FILE_USAGE.format(action="delete"),
    ),
    CommandRule(
        segment=Segment.ARCHIVE,
        action="empty",
        required=frozenset({"archive_name"}),
        forbidden=frozenset({"file_kind", "name", "text"}),
        build=_build_archive_empty,
        usage="fskit --segment archive --action empty --archive-name ARCHIVE",
    ),
    CommandRule(
        segment=Segment.ARCHIVE,
        action="archive",
        required=frozenset({"archive_name", "name"}),
        forbidden=frozenset({"file_kind", "text"}),
        build=_build_archive_add,
        usage="fskit --segment archive --action archive --archive-name ARCHIVE --name FILE",
    ),
)

RULES: dict[tuple[Segment, str], CommandRule] = {
    (rule.segment, rule.action): rule for rule in _RULE_LIST
}


def actions_for(segment: Segment) -> list[str]:
    """Return the recognised actions for *segment*, in table order."""
    return [rule.action for rule in _RULE_LIST if rule.segment is segment]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _has_value(raw: RawRequest, field: str) -> bool:
    """Required-field check; blank names count as missing, empty text does not."""
    value = getattr(raw, field)
    if value is None:
        return False
    if field == "text" or not isinstance(value, str):
        return True
    return bool(value.strip())


def _flags(fields: list[str]) -> str:
    order = list(FLAG_NAMES)
    return ", ".join(FLAG_NAMES[field] for field in sorted(fields, key=order.index))


def build_command(raw: RawRequest) -> Command:
    """Validate *raw* against the table and return its typed command.

    Raises
    ------
    UsageError
        If the segment or action is missing or unknown, a required flag
        is absent, or a forbidden flag is present.
    """
    if raw.segment is None:
        raise UsageError(
            "--segment is required.",
            hint=f"Choose one of: {', '.join(seg.value for seg in Segment)}",
        )
    valid_actions = ", ".join(actions_for(raw.segment))
    if not raw.action:
        raise UsageError(
            f"--action is required for segment '{raw.segment.value}'.",
            hint=f"Valid actions: {valid_actions}",
        )

    rule = RULES.get((raw.segment, raw.action))
    if rule is None:
        raise UsageError(
            f"Unrecognized action '{raw.action}' for segment '{raw.segment.value}'.",
            hint=f"Valid actions: {valid_actions}",
        )

    missing = [field for field in rule.required if not _has_value(raw, field)]
    if missing:
        raise UsageError(
            f"{rule.segment.value} {rule.action} requires {_flags(missing)}.",
            hint=rule.usage,
        )

    extra = [field for field in rule.forbidden if getattr(raw, field) is not None]
    if extra:
        raise UsageError(
            f"{rule.segment.value} {rule.action} does not accept {_flags(extra)}.",
            hint=rule.usage,
        )

    return rule.build(raw)
