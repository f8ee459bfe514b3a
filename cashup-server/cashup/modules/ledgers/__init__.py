"""Ledger domain exports."""

from .classifier import CreditSaleClassifier, KeywordCreditClassifier, is_credit_sale
from .models import (
    Cashbook,
    CashbookLine,
    DayLedger,
    Direction,
    LedgerBatch,
    LedgerEntry,
    LedgerKind,
    LedgerRecord,
    MovementTotals,
    SourceResult,
    SourceStatus,
)
from .service import LedgerAggregator, normalize_method
from .sources import LedgerSource, build_sql_sources
from .window import DayWindow, day_window

__all__ = [
    "Cashbook",
    "CashbookLine",
    "CreditSaleClassifier",
    "DayLedger",
    "DayWindow",
    "Direction",
    "LedgerBatch",
    "KeywordCreditClassifier",
    "LedgerAggregator",
    "LedgerEntry",
    "LedgerKind",
    "LedgerRecord",
    "LedgerSource",
    "MovementTotals",
    "SourceResult",
    "SourceStatus",
    "build_sql_sources",
    "day_window",
    "is_credit_sale",
    "normalize_method",
]
