"""Snapshot domain specific exceptions."""

from __future__ import annotations

MISSING_TABLE_MESSAGE = (
    "Balances table not found. Run the database migrations (alembic upgrade head) "
    "to create `balances`, then refresh."
)


class SnapshotError(Exception):
    """Base class for snapshot domain errors."""


class SnapshotValidationError(SnapshotError):
    """Raised when submitted balances are rejected before persistence."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class SnapshotStoreError(SnapshotError):
    """Raised when the snapshot store fails for a reason other than a missing table."""


class SnapshotStoreMissingError(SnapshotStoreError):
    """Raised when the ``balances`` table does not exist yet."""

    def __init__(self, message: str = MISSING_TABLE_MESSAGE) -> None:
        super().__init__(message)
