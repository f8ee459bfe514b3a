"""Reconciliation engine exports."""

from .deltas import diff
from .evaluator import BALANCE_TOLERANCE, evaluate
from .models import (
    Deltas,
    NormalizedTotals,
    ReconciliationResult,
    ReconciliationRun,
    ReconciliationStatus,
)
from .service import DEFAULT_FX_RATE, ReconciliationService
from .totals import MAX_FX_RATE, MIN_FX_RATE, normalize

__all__ = [
    "BALANCE_TOLERANCE",
    "DEFAULT_FX_RATE",
    "MAX_FX_RATE",
    "MIN_FX_RATE",
    "Deltas",
    "NormalizedTotals",
    "ReconciliationResult",
    "ReconciliationRun",
    "ReconciliationService",
    "ReconciliationStatus",
    "diff",
    "evaluate",
    "normalize",
]
