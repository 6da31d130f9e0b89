"""psutil backed implementation of :class:`~fskit.core.protocols.DiskEnumerator`.

This module is the **only** place in the codebase that imports
``psutil``.  Volumes whose usage cannot be read (permission denied,
unmounted media, empty card readers) are skipped rather than failing
the whole enumeration.
"""

from __future__ import annotations

import logging
from typing import Any

from fskit.core.models import DiskRecord
from fskit.exceptions import EnvironmentError, StorageIOError

logger = logging.getLogger(__name__)


class PsutilDiskEnumerator:
    """Concrete :class:`DiskEnumerator` backed by ``psutil``.

    Parameters
    ----------
    all_partitions:
        Forwarded to ``psutil.disk_partitions(all=...)``; when ``False``
        (default) pseudo and duplicate filesystems are left out.
    """

    def __init__(self, *, all_partitions: bool = False) -> None:
        self._all_partitions: bool = all_partitions

    @staticmethod
    def _load_psutil() -> Any:
        try:
            import psutil
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "psutil is not installed. Install with: pip install psutil",
            ) from exc
        return psutil

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def list_disks(self) -> list[DiskRecord]:
        """Return a record for every readable mounted volume.

        Raises
        ------
        EnvironmentError
            When psutil is not installed.
        StorageIOError
            When the partition table itself cannot be read.
        """
        psutil = self._load_psutil()

        try:
            partitions = psutil.disk_partitions(all=self._all_partitions)
        except OSError as exc:
            raise StorageIOError(f"Cannot enumerate volumes: {exc}") from exc

        records: list[DiskRecord] = []
        for part in partitions:
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as exc:
                logger.debug("Skipping %s: %s", part.mountpoint, exc)
                continue
            records.append(
                DiskRecord(
                    name=part.device,
                    file_system=part.fstype,
                    available_bytes=int(usage.free),
                    total_bytes=int(usage.total),
                    mount_point=part.mountpoint,
                )
            )
        return records
