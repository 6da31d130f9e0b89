"""fskit: disk info, file management and ZIP archiving from one CLI.

Built around a declarative command table and a thin dispatcher with
pluggable storage collaborators.
"""

from fskit.version import __version__

__all__: list[str] = ["__version__"]
