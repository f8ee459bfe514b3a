"""SQLAlchemy-backed repository implementations."""

from .ledger_repository import (
    SqlCreditPaymentRepository,
    SqlExpenseRepository,
    SqlInvoiceRepository,
    SqlOrderRepository,
)
from .snapshot_repository import SqlSnapshotRepository

__all__ = [
    "SqlCreditPaymentRepository",
    "SqlExpenseRepository",
    "SqlInvoiceRepository",
    "SqlOrderRepository",
    "SqlSnapshotRepository",
]
