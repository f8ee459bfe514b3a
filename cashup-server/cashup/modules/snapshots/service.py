"""Snapshot domain service."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.core.money import MAX_AMOUNT, ZERO, parse_amount
from cashup.db.models import Balance as BalanceModel
from cashup.infrastructure.database.repositories.snapshot_repository import SqlSnapshotRepository

from .exceptions import SnapshotStoreError, SnapshotStoreMissingError, SnapshotValidationError
from .models import ALL_CHANNELS, BalanceSnapshot, SnapshotInput
from .repository import SnapshotRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

# sqlite, postgres and mysql phrasings of "relation is missing"
_MISSING_TABLE_MARKERS = ("no such table", "does not exist", "doesn't exist", "undefinedtable")


def is_missing_table_error(exc: BaseException) -> bool:
    orig = getattr(exc, "orig", None) or exc
    text = f"{type(orig).__name__} {orig}".lower()
    return any(marker in text for marker in _MISSING_TABLE_MARKERS)


def translate_store_error(exc: SQLAlchemyError) -> SnapshotStoreError:
    if is_missing_table_error(exc):
        return SnapshotStoreMissingError()
    return SnapshotStoreError(f"Snapshot store failure: {exc.__class__.__name__}")


def clean_snapshot_input(day: date, payload: SnapshotInput) -> BalanceSnapshot:
    """Coerce raw input into a snapshot value, rejecting negative or oversized amounts."""
    amounts = {}
    for channel, raw in payload.raw_amounts().items():
        amount = parse_amount(raw)
        if amount < ZERO:
            raise SnapshotValidationError(
                f"{channel.value} must not be negative (got {amount})",
                field=channel.value,
            )
        if amount > MAX_AMOUNT:
            raise SnapshotValidationError(
                f"{channel.value} is too large (max {MAX_AMOUNT})",
                field=channel.value,
            )
        amounts[channel.value] = amount
    note = (payload.note or "").strip() or None
    return BalanceSnapshot(balance_date=day, note=note, **amounts)


@dataclass(slots=True)
class SnapshotService:
    repository: SnapshotRepository

    @classmethod
    def with_session_factory(cls, session_factory: async_sessionmaker[AsyncSession]) -> "SnapshotService":
        return cls(SqlSnapshotRepository(session_factory))

    async def get_for_day(self, day: date) -> BalanceSnapshot | None:
        row = await self._call(self.repository.get_by_date(day))
        return self._to_domain(row) if row else None

    async def get_previous(self, day: date) -> BalanceSnapshot | None:
        row = await self._call(self.repository.get_latest_before(day))
        return self._to_domain(row) if row else None

    async def save_snapshot(self, day: date, payload: SnapshotInput) -> BalanceSnapshot:
        cleaned = clean_snapshot_input(day, payload)
        row = await self._call(
            self.repository.upsert(
                day,
                amounts={channel.value: cleaned.amount(channel) for channel in ALL_CHANNELS},
                note=cleaned.note,
            )
        )
        logger.info("Saved balances for %s (id=%s)", day.isoformat(), row.id)
        return self._to_domain(row)

    @staticmethod
    async def _call(operation: Awaitable[T]) -> T:
        try:
            return await operation
        except SQLAlchemyError as exc:
            error = translate_store_error(exc)
            logger.error("Snapshot store error: %s (%s)", error, exc)
            raise error from exc

    @staticmethod
    def _to_domain(model: BalanceModel) -> BalanceSnapshot:
        return BalanceSnapshot(
            id=model.id,
            balance_date=model.balance_date,
            cash_sos=parse_amount(model.cash_sos),
            cash_usd=parse_amount(model.cash_usd),
            evc=parse_amount(model.evc),
            edahab=parse_amount(model.edahab),
            merchant=parse_amount(model.merchant),
            note=model.note,
            created_at=model.created_at,
        )
