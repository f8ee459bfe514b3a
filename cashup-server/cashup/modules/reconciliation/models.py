"""Value types produced by a reconciliation run. None of them is persisted."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from cashup.core.money import ZERO, round_local, round_reference
from cashup.modules.ledgers import MovementTotals
from cashup.modules.snapshots import ALL_CHANNELS, BalanceSnapshot, Channel


def round_channel(channel: Channel, value: Decimal) -> Decimal:
    return round_local(value) if channel.is_local else round_reference(value)


@dataclass(frozen=True, slots=True)
class NormalizedTotals:
    """One snapshot expressed in the reference currency, at full precision."""

    cash_sos: Decimal = ZERO
    cash_usd: Decimal = ZERO
    evc: Decimal = ZERO
    edahab: Decimal = ZERO
    merchant: Decimal = ZERO
    fx_rate: Decimal = ZERO
    reference_total: Decimal = ZERO
    converted_total: Decimal = ZERO
    overall_total: Decimal = ZERO

    @property
    def fx_available(self) -> bool:
        return self.fx_rate > ZERO

    @property
    def local_total(self) -> Decimal:
        return self.cash_sos

    def amount(self, channel: Channel) -> Decimal:
        return getattr(self, channel.value)

    def display(self) -> dict[str, Decimal]:
        """Values rounded to each currency's minimum unit."""
        values = {channel.value: round_channel(channel, self.amount(channel)) for channel in ALL_CHANNELS}
        values.update(
            reference_total=round_reference(self.reference_total),
            converted_total=round_reference(self.converted_total),
            overall_total=round_reference(self.overall_total),
            local_total=round_local(self.local_total),
        )
        return values


@dataclass(frozen=True, slots=True)
class Deltas:
    channels: Mapping[Channel, Decimal]
    reference_total: Decimal
    local_total: Decimal
    overall_total: Decimal

    def channel(self, channel: Channel) -> Decimal:
        return self.channels[channel]


class ReconciliationStatus(str, Enum):
    BALANCED = "balanced"
    DIVERGENT = "divergent"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    expected: Decimal
    actual: Decimal
    difference: Decimal
    balanced: bool
    status: ReconciliationStatus
    tolerance: Decimal


@dataclass(frozen=True, slots=True)
class ReconciliationRun:
    day: date
    fx_rate: Decimal
    today: Optional[BalanceSnapshot]
    previous: Optional[BalanceSnapshot]
    current_totals: NormalizedTotals
    previous_totals: NormalizedTotals
    deltas: Deltas
    movement: MovementTotals
    result: ReconciliationResult
    computed_at: datetime
    is_draft: bool = False
    snapshot_error: Optional[str] = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def degraded(self) -> bool:
        return self.snapshot_error is not None or self.movement.degraded

    @property
    def status(self) -> ReconciliationStatus:
        return self.result.status
