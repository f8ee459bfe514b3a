"""Decimal helpers for free-form money input and per-currency rounding.

Every "garbage input becomes zero" decision lives in :func:`parse_amount`;
callers never see ``NaN`` or an exception for unparseable amounts.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
REFERENCE_QUANTUM = Decimal("0.01")
LOCAL_QUANTUM = Decimal("1")

# largest value a Numeric(18, 2) column holds
MAX_AMOUNT = Decimal("9999999999999999.99")


def parse_amount(value: Any, default: Decimal = ZERO) -> Decimal:
    """Parse operator or database input into a finite ``Decimal``.

    Surrounding whitespace and thousands separators are stripped from text.
    Anything that does not parse to a finite number yields ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    else:
        text = str(value).replace(",", "").strip()
        if not text:
            return default
        try:
            parsed = Decimal(text)
        except (InvalidOperation, ValueError):
            return default
    if not parsed.is_finite():
        return default
    return parsed


def _quantize(value: Decimal, quantum: Decimal) -> Decimal:
    with localcontext() as ctx:
        # quantize fails when the result has more digits than the context precision
        ctx.prec = max(ctx.prec, value.adjusted() - quantum.adjusted() + 2)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)


def round_reference(value: Decimal) -> Decimal:
    """Round to the reference currency's minimum unit (cents)."""
    return _quantize(value, REFERENCE_QUANTUM)


def round_local(value: Decimal) -> Decimal:
    """Round to the local currency's minimum unit (whole shillings)."""
    return _quantize(value, LOCAL_QUANTUM)


__all__ = [
    "LOCAL_QUANTUM",
    "MAX_AMOUNT",
    "REFERENCE_QUANTUM",
    "ZERO",
    "parse_amount",
    "round_local",
    "round_reference",
]
