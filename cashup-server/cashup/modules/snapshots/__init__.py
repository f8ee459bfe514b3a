"""Snapshot domain exports."""

from .exceptions import (
    SnapshotError,
    SnapshotStoreError,
    SnapshotStoreMissingError,
    SnapshotValidationError,
)
from .models import (
    ALL_CHANNELS,
    LOCAL_CHANNELS,
    REFERENCE_CHANNELS,
    BalanceSnapshot,
    Channel,
    SnapshotInput,
)
from .service import SnapshotService, clean_snapshot_input, translate_store_error

__all__ = [
    "ALL_CHANNELS",
    "LOCAL_CHANNELS",
    "REFERENCE_CHANNELS",
    "BalanceSnapshot",
    "Channel",
    "SnapshotError",
    "SnapshotInput",
    "SnapshotService",
    "SnapshotStoreError",
    "SnapshotStoreMissingError",
    "SnapshotValidationError",
    "clean_snapshot_input",
    "translate_store_error",
]
