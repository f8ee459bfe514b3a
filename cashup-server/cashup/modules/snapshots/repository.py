"""Repository protocol for balance snapshots."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol

from cashup.db.models import Balance as BalanceModel


class SnapshotRepository(Protocol):
    async def get_by_date(self, day: date) -> BalanceModel | None:
        ...

    async def get_latest_before(self, day: date) -> BalanceModel | None:
        ...

    async def upsert(
        self,
        day: date,
        *,
        amounts: dict[str, Decimal],
        note: Optional[str],
    ) -> BalanceModel:
        ...
