"""Expected cash movement for a day, aggregated from the four ledgers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone, tzinfo
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.core.money import ZERO, round_reference
from cashup.infrastructure.database.repositories.ledger_repository import DEFAULT_ROW_LIMIT

from .classifier import CreditSaleClassifier, is_credit_sale
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
from .sources import LedgerSource, build_sql_sources
from .window import DayWindow, day_window

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def normalize_method(raw: Optional[str]) -> str:
    text = (raw or "").strip().lower()
    if not text:
        return "unknown"
    if "evc" in text:
        return "evc"
    if "edahab" in text:
        return "edahab"
    if "cash" in text:
        return "cash"
    return text


class LedgerAggregator:
    """Fans out to every ledger source and sums what each says moved.

    A source that raises is reported as unavailable and contributes zero;
    callers decide what a partial answer is worth via ``MovementTotals.degraded``.
    """

    def __init__(
        self,
        sources: Sequence[LedgerSource],
        *,
        tz: tzinfo,
        classifier: CreditSaleClassifier = is_credit_sale,
    ) -> None:
        self._sources = list(sources)
        self._tz = tz
        self._classifier = classifier

    @classmethod
    def with_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        tz: tzinfo,
        classifier: CreditSaleClassifier = is_credit_sale,
        row_limit: int = DEFAULT_ROW_LIMIT,
    ) -> "LedgerAggregator":
        return cls(build_sql_sources(session_factory, row_limit), tz=tz, classifier=classifier)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    async def entries_for_day(self, day: date) -> DayLedger:
        window = day_window(day, self._tz)
        collected = await asyncio.gather(*(self._collect(source, window) for source in self._sources))
        entries: list[LedgerEntry] = []
        results: list[SourceResult] = []
        for source_entries, result in collected:
            entries.extend(source_entries)
            results.append(result)
        return DayLedger(window=window, entries=tuple(entries), sources=tuple(results))

    async def movement_for_day(self, day: date) -> MovementTotals:
        ledger = await self.entries_for_day(day)
        inbound = sum((e.amount for e in ledger.entries if e.direction is Direction.IN), ZERO)
        outbound = sum((e.amount for e in ledger.entries if e.direction is Direction.OUT), ZERO)
        movement = MovementTotals(
            day=day,
            inbound=round_reference(inbound),
            outbound=round_reference(outbound),
            net=round_reference(inbound - outbound),
            sources=ledger.sources,
        )
        logger.debug(
            "Movement for %s: in=%s out=%s net=%s degraded=%s",
            day.isoformat(),
            movement.inbound,
            movement.outbound,
            movement.net,
            movement.degraded,
        )
        return movement

    async def cashbook_for_day(self, day: date) -> Cashbook:
        ledger = await self.entries_for_day(day)
        lines = [line for line in map(self._to_line, ledger.entries) if line is not None]
        lines.sort(key=lambda line: line.occurred_at or _EPOCH, reverse=True)
        cash_in = sum((line.amount for line in lines if line.direction is Direction.IN), ZERO)
        cash_out = sum((line.amount for line in lines if line.direction is Direction.OUT), ZERO)
        return Cashbook(
            day=day,
            lines=tuple(lines),
            cash_in=round_reference(cash_in),
            cash_out=round_reference(cash_out),
            net=round_reference(cash_in - cash_out),
            sources=ledger.sources,
        )

    async def _collect(
        self,
        source: LedgerSource,
        window: DayWindow,
    ) -> tuple[list[LedgerEntry], SourceResult]:
        try:
            batch: LedgerBatch = await source.query_by_date_window(window)
        except Exception as exc:
            logger.warning(
                "Ledger source %s unavailable for %s: %s",
                source.kind.value,
                window.day.isoformat(),
                exc,
            )
            return [], SourceResult(
                kind=source.kind,
                status=SourceStatus.UNAVAILABLE,
                error=f"{exc.__class__.__name__}: {exc}",
            )

        entries: list[LedgerEntry] = []
        excluded = 0
        total = ZERO
        for record in batch.records:
            entry = self._classify(source.kind, record)
            if entry is None or entry.direction is None:
                excluded += 1
                continue
            entries.append(entry)
            total += entry.amount
        if batch.truncated:
            logger.warning(
                "Ledger source %s for %s hit the row limit at %d rows; total is incomplete",
                source.kind.value,
                window.day.isoformat(),
                len(batch.records),
            )
        return entries, SourceResult(
            kind=source.kind,
            status=SourceStatus.TRUNCATED if batch.truncated else SourceStatus.OK,
            total=round_reference(total),
            record_count=len(batch.records),
            excluded_count=excluded,
        )

    def _classify(self, kind: LedgerKind, record: LedgerRecord) -> LedgerEntry | None:
        # non-positive rows are refunds or typos; they must not flip the sign of a total
        if record.amount <= ZERO:
            return None
        return LedgerEntry(
            kind=kind,
            amount=record.amount,
            record_id=record.id,
            occurred_at=record.occurred_at,
            is_credit=kind is LedgerKind.SALE and self._classifier(record.memo),
            memo=record.memo,
            method=record.method,
            reference=record.reference,
        )

    @staticmethod
    def _to_line(entry: LedgerEntry) -> CashbookLine | None:
        direction = entry.direction
        if direction is None:
            return None
        memo = (entry.memo or "").strip()
        if entry.kind is LedgerKind.SALE:
            title = f"Sale (pos) • {memo.upper()}" if memo else "Sale (pos)"
        elif entry.kind is LedgerKind.CREDIT_PAYMENT:
            title = "Credit payment"
        elif entry.kind is LedgerKind.EXPENSE:
            title = memo or "Expense"
        else:
            title = memo or "Invoice"
        return CashbookLine(
            id=f"{entry.kind.value}:{entry.record_id}",
            direction=direction,
            source=entry.kind,
            amount=entry.amount,
            title=title,
            method=normalize_method(entry.method),
            occurred_at=entry.occurred_at,
            ref=entry.reference,
        )

