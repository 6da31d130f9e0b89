"""Tests for the ZIP archive store (infra/zip_archives.py).

Real archives, confined to ``tmp_path``.
"""

from __future__ import annotations

import stat
import zipfile
from pathlib import Path

import pytest

from fskit.exceptions import ConflictError, NotFoundError, StorageIOError
from fskit.infra.zip_archives import ENTRY_PERMISSIONS, ZipArchiveStore


@pytest.fixture
def store() -> ZipArchiveStore:
    return ZipArchiveStore()


class TestCreateEmpty:
    def test_writes_valid_empty_archive(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        target = tmp_path / "z.zip"
        store.create_empty(str(target))
        assert zipfile.is_zipfile(target)
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == []

    def test_overwrites_existing_file(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        target = tmp_path / "z.zip"
        with zipfile.ZipFile(target, "w") as archive:
            archive.writestr("old.txt", "old")
        store.create_empty(str(target))
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == []

    def test_missing_parent_is_not_found(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            store.create_empty(str(tmp_path / "missing" / "z.zip"))


class TestExists:
    def test_reports_presence(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        target = tmp_path / "z.zip"
        assert store.exists(str(target)) is False
        store.create_empty(str(target))
        assert store.exists(str(target)) is True

    def test_directory_is_not_an_archive(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        assert store.exists(str(tmp_path)) is False


class TestAddEntry:
    def test_entry_is_stored_uncompressed_with_permissions(
        self, store: ZipArchiveStore, tmp_path: Path,
    ) -> None:
        target = tmp_path / "z.zip"
        store.create_empty(str(target))
        store.add_entry(str(target), "a.json", b'{"k": 1}')

        with zipfile.ZipFile(target) as archive:
            info = archive.getinfo("a.json")
            assert archive.read("a.json") == b'{"k": 1}'
        assert info.compress_type == zipfile.ZIP_STORED
        mode = info.external_attr >> 16
        assert stat.S_ISREG(mode)
        assert stat.S_IMODE(mode) == ENTRY_PERMISSIONS

    def test_entries_accumulate(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        target = tmp_path / "z.zip"
        store.create_empty(str(target))
        store.add_entry(str(target), "a.json", b"1")
        store.add_entry(str(target), "b.xml", b"2")
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == ["a.json", "b.xml"]

    def test_missing_archive_is_not_found_and_not_created(
        self, store: ZipArchiveStore, tmp_path: Path,
    ) -> None:
        target = tmp_path / "z.zip"
        with pytest.raises(NotFoundError):
            store.add_entry(str(target), "a.json", b"1")
        assert not target.exists()

    def test_duplicate_entry_is_conflict(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        target = tmp_path / "z.zip"
        store.create_empty(str(target))
        store.add_entry(str(target), "a.json", b"1")
        with pytest.raises(ConflictError):
            store.add_entry(str(target), "a.json", b"2")
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == ["a.json"]

    def test_duplicate_detected_after_nul_truncation(
        self, store: ZipArchiveStore, tmp_path: Path,
    ) -> None:
        target = tmp_path / "z.zip"
        store.create_empty(str(target))
        store.add_entry(str(target), "a.json", b"1")
        with pytest.raises(ConflictError):
            store.add_entry(str(target), "a.json\x00tail", b"2")
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == ["a.json"]

    def test_duplicate_detected_with_windows_separator(
        self, store: ZipArchiveStore, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        target = tmp_path / "z.zip"
        store.create_empty(str(target))
        with monkeypatch.context() as patched:
            patched.setattr(zipfile.os, "sep", "\\")
            store.add_entry(str(target), "dir\\a.json", b"1")
            with pytest.raises(ConflictError):
                store.add_entry(str(target), "dir\\a.json", b"2")
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == ["dir/a.json"]

    def test_non_zip_file_is_io_error(self, store: ZipArchiveStore, tmp_path: Path) -> None:
        target = tmp_path / "z.zip"
        target.write_bytes(b"definitely not a zip")
        with pytest.raises(StorageIOError, match="Not a valid ZIP"):
            store.add_entry(str(target), "a.json", b"1")
        assert target.read_bytes() == b"definitely not a zip"


class TestBuildEntryInfo:
    def test_header_fields(self) -> None:
        info = ZipArchiveStore.build_entry_info("dir/a.json")
        assert info.filename == "dir/a.json"
        assert info.compress_type == zipfile.ZIP_STORED
        assert info.create_system == 3
