"""Ledger source protocol and SQL-backed adapters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timezone
from typing import Any, Callable, Optional, Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.core.money import parse_amount
from cashup.db.models import CreditPayment, Expense, Invoice, Order
from cashup.infrastructure.database.repositories.ledger_repository import (
    DEFAULT_ROW_LIMIT,
    SqlCreditPaymentRepository,
    SqlExpenseRepository,
    SqlInvoiceRepository,
    SqlOrderRepository,
)

from .models import LedgerBatch, LedgerKind, LedgerRecord
from .window import DayWindow


class LedgerSource(Protocol):
    kind: LedgerKind

    async def query_by_date_window(self, window: DayWindow) -> LedgerBatch:
        ...


def _as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    # sqlite hands timestamps back without tzinfo; they were written in UTC
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _batch(rows: Sequence[Any], row_limit: int, to_record: Callable[[Any], LedgerRecord]) -> LedgerBatch:
    return LedgerBatch(
        records=tuple(to_record(row) for row in rows[:row_limit]),
        truncated=len(rows) > row_limit,
    )


@dataclass(slots=True)
class SalesLedgerSource:
    repository: SqlOrderRepository
    kind: LedgerKind = LedgerKind.SALE

    async def query_by_date_window(self, window: DayWindow) -> LedgerBatch:
        rows = await self.repository.list_completed_pos(window.start, window.end)
        return _batch(rows, self.repository.row_limit, self._to_record)

    @staticmethod
    def _to_record(model: Order) -> LedgerRecord:
        return LedgerRecord(
            id=str(model.id),
            amount=parse_amount(model.total),
            occurred_at=_as_utc(model.created_at),
            memo=model.note,
            reference=str(model.id),
        )


@dataclass(slots=True)
class CreditPaymentLedgerSource:
    repository: SqlCreditPaymentRepository
    kind: LedgerKind = LedgerKind.CREDIT_PAYMENT

    async def query_by_date_window(self, window: DayWindow) -> LedgerBatch:
        rows = await self.repository.list_between(window.start, window.end)
        return _batch(rows, self.repository.row_limit, self._to_record)

    @staticmethod
    def _to_record(model: CreditPayment) -> LedgerRecord:
        return LedgerRecord(
            id=str(model.id),
            amount=parse_amount(model.amount),
            occurred_at=_as_utc(model.created_at),
            reference=_text(model.credit_id),
        )


@dataclass(slots=True)
class ExpenseLedgerSource:
    repository: SqlExpenseRepository
    kind: LedgerKind = LedgerKind.EXPENSE

    async def query_by_date_window(self, window: DayWindow) -> LedgerBatch:
        rows = await self.repository.list_between(window.start, window.end)
        return _batch(rows, self.repository.row_limit, self._to_record)

    @staticmethod
    def _to_record(model: Expense) -> LedgerRecord:
        return LedgerRecord(
            id=str(model.id),
            amount=parse_amount(model.amount),
            occurred_at=_as_utc(model.created_at),
            memo=model.note,
            method=model.payment_method,
            reference=str(model.id),
        )


@dataclass(slots=True)
class InvoiceLedgerSource:
    """Invoices carry their own business date, so they are matched on it."""

    repository: SqlInvoiceRepository
    kind: LedgerKind = LedgerKind.INVOICE

    async def query_by_date_window(self, window: DayWindow) -> LedgerBatch:
        rows = await self.repository.list_for_date(window.day)
        return _batch(rows, self.repository.row_limit, self._to_record)

    @staticmethod
    def _to_record(model: Invoice) -> LedgerRecord:
        occurred_at = _as_utc(model.created_at)
        if occurred_at is None and model.invoice_date is not None:
            occurred_at = datetime.combine(model.invoice_date, time.min, tzinfo=timezone.utc)
        return LedgerRecord(
            id=str(model.id),
            amount=parse_amount(model.total_amount),
            occurred_at=occurred_at,
            memo=model.comments,
            reference=str(model.id),
        )


def build_sql_sources(
    session_factory: async_sessionmaker[AsyncSession],
    row_limit: int = DEFAULT_ROW_LIMIT,
) -> list[LedgerSource]:
    return [
        SalesLedgerSource(SqlOrderRepository(session_factory, row_limit)),
        CreditPaymentLedgerSource(SqlCreditPaymentRepository(session_factory, row_limit)),
        ExpenseLedgerSource(SqlExpenseRepository(session_factory, row_limit)),
        InvoiceLedgerSource(SqlInvoiceRepository(session_factory, row_limit)),
    ]


__all__ = [
    "CreditPaymentLedgerSource",
    "ExpenseLedgerSource",
    "InvoiceLedgerSource",
    "LedgerSource",
    "SalesLedgerSource",
    "build_sql_sources",
]
