"""SQLAlchemy implementation for the balance snapshot store"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import desc, select

from cashup.db.models import Balance

from .base import SessionFactoryRepository


class SqlSnapshotRepository(SessionFactoryRepository):
    async def get_by_date(self, day: date) -> Balance | None:
        stmt = select(Balance).where(Balance.balance_date == day)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def get_latest_before(self, day: date) -> Balance | None:
        stmt = (
            select(Balance)
            .where(Balance.balance_date < day)
            .order_by(desc(Balance.balance_date))
            .limit(1)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def upsert(
        self,
        day: date,
        *,
        amounts: dict[str, Decimal],
        note: Optional[str],
    ) -> Balance:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(select(Balance).where(Balance.balance_date == day))
                row = result.scalars().first()
                if row is None:
                    row = Balance(balance_date=day)
                    session.add(row)
                for column, amount in amounts.items():
                    setattr(row, column, amount)
                row.note = note
                await session.flush()
                await session.refresh(row)
            return row
