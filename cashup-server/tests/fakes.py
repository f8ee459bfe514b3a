"""In-memory stand-ins for the snapshot store and ledger sources."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from cashup.db.models import Balance
from cashup.modules.ledgers import DayWindow, LedgerBatch, LedgerKind, LedgerRecord


def balance_row(day: date, **amounts) -> Balance:
    values = {name: Decimal(str(amounts.get(name, 0))) for name in ("cash_sos", "cash_usd", "evc", "edahab", "merchant")}
    return Balance(
        id=f"bal-{day.isoformat()}",
        balance_date=day,
        note=amounts.get("note"),
        created_at=datetime(day.year, day.month, day.day, 20, 0, tzinfo=timezone.utc),
        **values,
    )


class FakeSnapshotRepository:
    def __init__(self, rows: Iterable[Balance] = (), error: Optional[Exception] = None) -> None:
        self.rows = {row.balance_date: row for row in rows}
        self.error = error
        self.upserts: list[tuple[date, dict, Optional[str]]] = []

    async def get_by_date(self, day: date) -> Balance | None:
        if self.error:
            raise self.error
        return self.rows.get(day)

    async def get_latest_before(self, day: date) -> Balance | None:
        if self.error:
            raise self.error
        earlier = [row_day for row_day in self.rows if row_day < day]
        return self.rows[max(earlier)] if earlier else None

    async def upsert(self, day: date, *, amounts: dict, note: Optional[str]) -> Balance:
        if self.error:
            raise self.error
        self.upserts.append((day, dict(amounts), note))
        row = Balance(id=f"bal-{day.isoformat()}", balance_date=day, note=note, **amounts)
        self.rows[day] = row
        return row


class StubSource:
    def __init__(
        self,
        kind: LedgerKind,
        records: Iterable[LedgerRecord] = (),
        error: Optional[Exception] = None,
        truncated: bool = False,
    ) -> None:
        self.kind = kind
        self.records = list(records)
        self.error = error
        self.truncated = truncated
        self.windows: list[DayWindow] = []

    async def query_by_date_window(self, window: DayWindow) -> LedgerBatch:
        self.windows.append(window)
        if self.error:
            raise self.error
        return LedgerBatch(records=tuple(self.records), truncated=self.truncated)


def record(record_id: str, amount, *, memo: Optional[str] = None, method: Optional[str] = None,
           occurred_at: Optional[datetime] = None) -> LedgerRecord:
    return LedgerRecord(
        id=record_id,
        amount=Decimal(str(amount)),
        occurred_at=occurred_at,
        memo=memo,
        method=method,
        reference=record_id,
    )


def stub_sources(
    sales: Iterable[LedgerRecord] = (),
    credit_payments: Iterable[LedgerRecord] = (),
    expenses: Iterable[LedgerRecord] = (),
    invoices: Iterable[LedgerRecord] = (),
) -> list[StubSource]:
    return [
        StubSource(LedgerKind.SALE, sales),
        StubSource(LedgerKind.CREDIT_PAYMENT, credit_payments),
        StubSource(LedgerKind.EXPENSE, expenses),
        StubSource(LedgerKind.INVOICE, invoices),
    ]
