"""Domain models for the day's money ledgers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from cashup.core.money import ZERO

from .window import DayWindow


class LedgerKind(str, Enum):
    SALE = "sale"
    CREDIT_PAYMENT = "credit_payment"
    EXPENSE = "expense"
    INVOICE = "invoice"


class Direction(str, Enum):
    IN = "cash_in"
    OUT = "cash_out"


class SourceStatus(str, Enum):
    OK = "ok"
    TRUNCATED = "truncated"
    UNAVAILABLE = "unavailable"


@dataclass(slots=True)
class LedgerRecord:
    """One row as a ledger source reports it, before classification."""

    id: str
    amount: Decimal
    occurred_at: Optional[datetime] = None
    memo: Optional[str] = None
    method: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LedgerBatch:
    """Records a source read for one window. ``truncated`` means rows were left behind."""

    records: tuple[LedgerRecord, ...] = ()
    truncated: bool = False


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    kind: LedgerKind
    amount: Decimal
    record_id: str
    occurred_at: Optional[datetime] = None
    is_credit: bool = False
    memo: Optional[str] = None
    method: Optional[str] = None
    reference: Optional[str] = None

    @property
    def direction(self) -> Direction | None:
        """Cash direction, or ``None`` for a credit sale (no money received yet)."""
        if self.kind is LedgerKind.SALE:
            return None if self.is_credit else Direction.IN
        if self.kind is LedgerKind.CREDIT_PAYMENT:
            return Direction.IN
        return Direction.OUT


@dataclass(frozen=True, slots=True)
class SourceResult:
    kind: LedgerKind
    status: SourceStatus
    total: Decimal = ZERO
    record_count: int = 0
    excluded_count: int = 0
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.status is SourceStatus.OK


@dataclass(frozen=True, slots=True)
class DayLedger:
    """Classified entries for one day plus how each source fared."""

    window: DayWindow
    entries: tuple[LedgerEntry, ...]
    sources: tuple[SourceResult, ...]


@dataclass(frozen=True, slots=True)
class MovementTotals:
    day: date
    inbound: Decimal
    outbound: Decimal
    net: Decimal
    sources: tuple[SourceResult, ...] = ()

    @property
    def unavailable(self) -> tuple[LedgerKind, ...]:
        return tuple(result.kind for result in self.sources if result.status is SourceStatus.UNAVAILABLE)

    @property
    def truncated(self) -> tuple[LedgerKind, ...]:
        return tuple(result.kind for result in self.sources if result.status is SourceStatus.TRUNCATED)

    @property
    def degraded(self) -> bool:
        return any(not result.available for result in self.sources)

    def source(self, kind: LedgerKind) -> SourceResult | None:
        for result in self.sources:
            if result.kind is kind:
                return result
        return None


@dataclass(frozen=True, slots=True)
class CashbookLine:
    id: str
    direction: Direction
    source: LedgerKind
    amount: Decimal
    title: str
    method: str = "unknown"
    occurred_at: Optional[datetime] = None
    ref: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Cashbook:
    day: date
    lines: tuple[CashbookLine, ...]
    cash_in: Decimal
    cash_out: Decimal
    net: Decimal
    sources: tuple[SourceResult, ...] = field(default_factory=tuple)

    @property
    def degraded(self) -> bool:
        return any(not result.available for result in self.sources)
