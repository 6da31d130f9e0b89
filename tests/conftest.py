"""Shared pytest fixtures and configuration for the fskit test suite.

Guidelines
----------
* Filesystem tests run inside ``tmp_path``; never the real working tree.
* psutil must be mocked at the infra boundary; no test reads real disks.
* Core tests use recording fakes; no side effects.
* Tests must not depend on ``FSKIT_*`` variables from the caller's shell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from fskit.core.dispatcher import Dispatcher
from fskit.core.models import DiskRecord
from fskit.exceptions import ConflictError, NotFoundError


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FSKIT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FSKIT_ENCODING", raising=False)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with ``tmp_path`` as the current directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Recording fakes
# ---------------------------------------------------------------------------

@dataclass
class CallLog:
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeFileStore:
    def __init__(self, log: CallLog, files: dict[str, bytes] | None = None) -> None:
        self.log = log
        self.files: dict[str, bytes] = dict(files or {})

    def create(self, path: str) -> None:
        self.log.record("create", path)
        if path in self.files:
            raise ConflictError("File already exists.")
        self.files[path] = b""

    def read_text(self, path: str) -> str:
        self.log.record("read_text", path)
        if path not in self.files:
            raise NotFoundError("File does not exist.")
        return self.files[path].decode("utf-8")

    def read_bytes(self, path: str) -> bytes:
        self.log.record("read_bytes", path)
        if path not in self.files:
            raise NotFoundError("File does not exist.")
        return self.files[path]

    def append_text(self, path: str, text: str) -> None:
        self.log.record("append_text", path, text)
        self.files[path] = self.files.get(path, b"") + text.encode("utf-8")

    def delete(self, path: str) -> None:
        self.log.record("delete", path)
        if path not in self.files:
            raise NotFoundError("File does not exist.")
        del self.files[path]


class FakeDiskEnumerator:
    def __init__(self, log: CallLog, records: list[DiskRecord] | None = None) -> None:
        self.log = log
        self.records: list[DiskRecord] = list(records or [])

    def list_disks(self) -> list[DiskRecord]:
        self.log.record("list_disks")
        return list(self.records)


class FakeArchiveStore:
    def __init__(self, log: CallLog) -> None:
        self.log = log
        self.archives: dict[str, dict[str, bytes]] = {}

    def exists(self, path: str) -> bool:
        self.log.record("exists", path)
        return path in self.archives

    def create_empty(self, path: str) -> None:
        self.log.record("create_empty", path)
        self.archives[path] = {}

    def add_entry(self, path: str, entry_name: str, data: bytes) -> None:
        self.log.record("add_entry", path, entry_name, data)
        if path not in self.archives:
            raise NotFoundError("Archive does not exist.")
        self.archives[path][entry_name] = data


@dataclass
class Collaborators:
    log: CallLog
    files: FakeFileStore
    disks: FakeDiskEnumerator
    archives: FakeArchiveStore

    def dispatcher(self) -> Dispatcher:
        return Dispatcher(files=self.files, disks=self.disks, archives=self.archives)


def make_disk(**overrides: Any) -> DiskRecord:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, Any] = {
        "name": "/dev/sda1",
        "file_system": "ext4",
        "available_bytes": 50 * 1024**3,
        "total_bytes": 200 * 1024**3,
        "mount_point": "/",
    }
    defaults.update(overrides)
    return DiskRecord(**defaults)


@pytest.fixture
def fakes() -> Collaborators:
    log = CallLog()
    return Collaborators(
        log=log,
        files=FakeFileStore(log),
        disks=FakeDiskEnumerator(log),
        archives=FakeArchiveStore(log),
    )


@pytest.fixture
def disk_factory() -> Any:
    return make_disk
