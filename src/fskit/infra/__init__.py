"""Infrastructure layer: external system integration.

This layer wraps all interaction with the local filesystem, ZIP files
and the operating system's volume table.  Every raw ``OSError``,
``zipfile`` or ``psutil`` exception must be caught here and re-raised
as a :class:`~fskit.exceptions.FskitError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from fskit.infra.local_files import LocalFileStore
from fskit.infra.psutil_disks import PsutilDiskEnumerator
from fskit.infra.zip_archives import ZipArchiveStore

__all__: list[str] = [
    "LocalFileStore",
    "PsutilDiskEnumerator",
    "ZipArchiveStore",
]
