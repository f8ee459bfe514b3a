"""Reconciliation evaluator: expected vs actual movement."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from cashup.core.money import parse_amount, round_reference

from .models import ReconciliationResult, ReconciliationStatus

# absorbs FX rounding noise only; anything larger is a missing or miscounted movement
BALANCE_TOLERANCE = Decimal("0.01")


def evaluate(
    expected: Any,
    actual: Any,
    *,
    degraded: bool = False,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> ReconciliationResult:
    """Compare movements rounded to cents.

    A degraded input (some ledger or the snapshot store could not be read)
    never yields ``balanced``; the status is ``INDETERMINATE`` instead.
    """
    expected_value = round_reference(parse_amount(expected))
    actual_value = round_reference(parse_amount(actual))
    difference = actual_value - expected_value
    within = abs(difference) < tolerance

    if degraded:
        status = ReconciliationStatus.INDETERMINATE
    elif within:
        status = ReconciliationStatus.BALANCED
    else:
        status = ReconciliationStatus.DIVERGENT

    return ReconciliationResult(
        expected=expected_value,
        actual=actual_value,
        difference=difference,
        balanced=status is ReconciliationStatus.BALANCED,
        status=status,
        tolerance=tolerance,
    )
