"""Domain modules and their public exports."""

from . import ledgers, reconciliation, snapshots

__all__ = [
    "ledgers",
    "reconciliation",
    "snapshots",
]
