"""SQLAlchemy read-only access to the shop's money ledgers"""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.db.models import CreditPayment, Expense, Invoice, Order

from .base import SessionFactoryRepository

DEFAULT_ROW_LIMIT = 5000


class _LimitedRepository(SessionFactoryRepository):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        row_limit: int = DEFAULT_ROW_LIMIT,
    ) -> None:
        super().__init__(session_factory)
        self.row_limit = row_limit

    async def _all(self, stmt) -> Sequence:
        # one row past the limit tells the caller the read was cut short
        async with self.session_factory() as session:
            result = await session.execute(stmt.limit(self.row_limit + 1))
            return result.scalars().all()


class SqlOrderRepository(_LimitedRepository):
    async def list_completed_pos(self, start: datetime, end: datetime) -> Sequence[Order]:
        stmt = (
            select(Order)
            .where(Order.status == "completed")
            .where(Order.channel == "pos")
            .where(Order.created_at >= start)
            .where(Order.created_at < end)
            .order_by(desc(Order.created_at))
        )
        return await self._all(stmt)


class SqlCreditPaymentRepository(_LimitedRepository):
    async def list_between(self, start: datetime, end: datetime) -> Sequence[CreditPayment]:
        stmt = (
            select(CreditPayment)
            .where(CreditPayment.created_at >= start)
            .where(CreditPayment.created_at < end)
            .order_by(desc(CreditPayment.created_at))
        )
        return await self._all(stmt)


class SqlExpenseRepository(_LimitedRepository):
    async def list_between(self, start: datetime, end: datetime) -> Sequence[Expense]:
        stmt = (
            select(Expense)
            .where(Expense.created_at >= start)
            .where(Expense.created_at < end)
            .order_by(desc(Expense.created_at))
        )
        return await self._all(stmt)


class SqlInvoiceRepository(_LimitedRepository):
    async def list_for_date(self, day: date) -> Sequence[Invoice]:
        stmt = select(Invoice).where(Invoice.invoice_date == day).order_by(desc(Invoice.id))
        return await self._all(stmt)
