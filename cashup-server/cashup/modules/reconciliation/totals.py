"""Totals calculator: one snapshot plus an FX rate into comparable totals."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from cashup.core.money import ZERO, parse_amount
from cashup.modules.snapshots import BalanceSnapshot

from .models import NormalizedTotals

# local units per reference unit; anything outside is treated as no rate at all
MIN_FX_RATE = Decimal("0.0001")
MAX_FX_RATE = Decimal("1000000000")


def normalize(snapshot: Optional[BalanceSnapshot], fx_rate: Any) -> NormalizedTotals:
    """Normalize ``snapshot`` using ``fx_rate`` local units per reference unit.

    A missing snapshot counts as all zeros. A missing rate, or one outside
    ``MIN_FX_RATE``..``MAX_FX_RATE``, disables conversion, so local cash
    contributes nothing to the overall total.
    """
    rate = parse_amount(fx_rate)
    if not MIN_FX_RATE <= rate <= MAX_FX_RATE:
        rate = ZERO

    if snapshot is None:
        return NormalizedTotals(fx_rate=rate)

    cash_sos = parse_amount(snapshot.cash_sos)
    cash_usd = parse_amount(snapshot.cash_usd)
    evc = parse_amount(snapshot.evc)
    edahab = parse_amount(snapshot.edahab)
    merchant = parse_amount(snapshot.merchant)

    reference_total = cash_usd + evc + edahab + merchant
    converted_total = cash_sos / rate if rate > ZERO else ZERO

    return NormalizedTotals(
        cash_sos=cash_sos,
        cash_usd=cash_usd,
        evc=evc,
        edahab=edahab,
        merchant=merchant,
        fx_rate=rate,
        reference_total=reference_total,
        converted_total=converted_total,
        overall_total=reference_total + converted_total,
    )
