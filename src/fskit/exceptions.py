"""Custom exception hierarchy for fskit.

All exceptions that cross layer boundaries must inherit from
:class:`FskitError`.  Raw ``OSError``, ``zipfile`` and ``psutil``
exceptions must NEVER propagate beyond the infrastructure layer; they
must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
FskitError
├── UsageError
├── NotFoundError
├── ConflictError
├── StorageIOError
└── EnvironmentError
"""

from __future__ import annotations


class FskitError(Exception):
    """Base exception for all fskit errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    naming the failed operation and its target.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

        self.operation: str | None = operation
        """Name of the operation that failed (e.g. ``"delete_file"``)."""

        self.target: str | None = target
        """Path, archive or disk the operation was acting on."""

    def describe(self) -> str:
        """Return the message prefixed with operation and target, if known."""
        message = str(self)
        if self.operation and self.target:
            return f"{self.operation} failed for '{self.target}': {message}"
        if self.operation:
            return f"{self.operation} failed: {message}"
        return message


# --- Request shape ---------------------------------------------------------

class UsageError(FskitError):
    """Raised when a request violates the command table.

    Always raised before any collaborator is touched.
    """


# --- Collaborator failures -------------------------------------------------

class NotFoundError(FskitError):
    """Raised when the target file, archive or disk does not exist."""


class ConflictError(FskitError):
    """Raised when the target already exists where creation demands absence."""


class StorageIOError(FskitError):
    """Raised on permission, device, decode or archive-format failures."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(FskitError):
    """Raised when a required runtime dependency is not available."""
