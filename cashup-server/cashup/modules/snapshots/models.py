"""Domain models for end-of-day balance snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from cashup.core.money import ZERO


class Channel(str, Enum):
    """One tracked money pool."""

    CASH_SOS = "cash_sos"
    CASH_USD = "cash_usd"
    EVC = "evc"
    EDAHAB = "edahab"
    MERCHANT = "merchant"

    @property
    def is_local(self) -> bool:
        return self is Channel.CASH_SOS


REFERENCE_CHANNELS: tuple[Channel, ...] = (
    Channel.CASH_USD,
    Channel.EVC,
    Channel.EDAHAB,
    Channel.MERCHANT,
)
LOCAL_CHANNELS: tuple[Channel, ...] = (Channel.CASH_SOS,)
ALL_CHANNELS: tuple[Channel, ...] = LOCAL_CHANNELS + REFERENCE_CHANNELS


@dataclass(frozen=True, slots=True)
class BalanceSnapshot:
    balance_date: date
    cash_sos: Decimal = ZERO
    cash_usd: Decimal = ZERO
    evc: Decimal = ZERO
    edahab: Decimal = ZERO
    merchant: Decimal = ZERO
    note: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def amount(self, channel: Channel) -> Decimal:
        return getattr(self, channel.value)


@dataclass(slots=True)
class SnapshotInput:
    """Raw operator input for one night's cash-up; amounts may be free text."""

    cash_sos: Any = None
    cash_usd: Any = None
    evc: Any = None
    edahab: Any = None
    merchant: Any = None
    note: Optional[str] = None

    def raw_amounts(self) -> dict[Channel, Any]:
        return {channel: getattr(self, channel.value) for channel in ALL_CHANNELS}
