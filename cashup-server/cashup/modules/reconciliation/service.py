"""Reconciliation run: load both snapshots and the day's ledgers, then compare."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.core.config import Settings
from cashup.core.money import parse_amount
from cashup.modules.ledgers import KeywordCreditClassifier, LedgerAggregator
from cashup.modules.snapshots import (
    BalanceSnapshot,
    SnapshotInput,
    SnapshotService,
    SnapshotStoreError,
    clean_snapshot_input,
)

from .deltas import diff
from .evaluator import BALANCE_TOLERANCE, evaluate
from .models import ReconciliationRun
from .totals import normalize

logger = logging.getLogger(__name__)

DEFAULT_FX_RATE = Decimal("36000")


@dataclass(slots=True)
class ReconciliationService:
    snapshots: SnapshotService
    aggregator: LedgerAggregator
    default_fx_rate: Decimal = DEFAULT_FX_RATE
    tolerance: Decimal = BALANCE_TOLERANCE

    @classmethod
    def with_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> "ReconciliationService":
        aggregator = LedgerAggregator.with_session_factory(
            session_factory,
            tz=settings.tz,
            classifier=KeywordCreditClassifier(settings.reconciliation.credit_tokens),
            row_limit=settings.database.ledger_row_limit,
        )
        return cls(
            snapshots=SnapshotService.with_session_factory(session_factory),
            aggregator=aggregator,
            default_fx_rate=settings.default_fx_rate,
            tolerance=settings.reconciliation.tolerance,
        )

    async def run(
        self,
        day: date,
        fx_rate: Any = None,
        *,
        draft: Optional[SnapshotInput] = None,
    ) -> ReconciliationRun:
        """Compute a fresh reconciliation for ``day``.

        ``draft`` stands in for today's stored snapshot so an operator can see
        the outcome before saving. Store and ledger failures degrade the run;
        only draft validation errors are raised.
        """
        rate = parse_amount(self.default_fx_rate if fx_rate is None else fx_rate)
        draft_snapshot = clean_snapshot_input(day, draft) if draft is not None else None

        today_result, previous_result, movement = await asyncio.gather(
            self.snapshots.get_for_day(day),
            self.snapshots.get_previous(day),
            self.aggregator.movement_for_day(day),
            return_exceptions=True,
        )
        if isinstance(movement, BaseException):
            raise movement

        warnings: list[str] = []
        snapshot_errors: list[str] = []
        today = self._snapshot_or_none(today_result, snapshot_errors)
        previous = self._snapshot_or_none(previous_result, snapshot_errors)
        if draft_snapshot is not None:
            today = draft_snapshot

        current_totals = normalize(today, rate)
        previous_totals = normalize(previous, rate)

        if not current_totals.fx_available:
            warnings.append("FX rate unavailable or out of range; local cash is left out of the overall totals")
        if today is None and not snapshot_errors:
            warnings.append("No balances recorded for this day yet; today counts as zero until they are saved")
        if previous is None and not snapshot_errors:
            warnings.append("No earlier balances recorded; comparing against a zero baseline")
        for kind in movement.unavailable:
            warnings.append(f"Ledger '{kind.value}' could not be read; its amount is missing from the expected change")
        for kind in movement.truncated:
            warnings.append(f"Ledger '{kind.value}' has more rows than the read limit; its amount is incomplete")

        deltas = diff(current_totals, previous_totals)
        snapshot_error = snapshot_errors[0] if snapshot_errors else None
        result = evaluate(
            movement.net,
            deltas.overall_total,
            degraded=snapshot_error is not None or movement.degraded,
            tolerance=self.tolerance,
        )

        run = ReconciliationRun(
            day=day,
            fx_rate=current_totals.fx_rate,
            today=today,
            previous=previous,
            current_totals=current_totals,
            previous_totals=previous_totals,
            deltas=deltas,
            movement=movement,
            result=result,
            computed_at=datetime.now(timezone.utc),
            is_draft=draft_snapshot is not None,
            snapshot_error=snapshot_error,
            warnings=tuple(warnings),
        )
        logger.info(
            "Reconciliation %s: expected=%s actual=%s diff=%s status=%s",
            day.isoformat(),
            result.expected,
            result.actual,
            result.difference,
            result.status.value,
        )
        return run

    async def save_and_rerun(
        self,
        day: date,
        payload: SnapshotInput,
        fx_rate: Any = None,
    ) -> tuple[BalanceSnapshot, ReconciliationRun]:
        snapshot = await self.snapshots.save_snapshot(day, payload)
        return snapshot, await self.run(day, fx_rate)

    @staticmethod
    def _snapshot_or_none(result: Any, errors: list[str]) -> Optional[BalanceSnapshot]:
        if isinstance(result, SnapshotStoreError):
            errors.append(str(result))
            return None
        if isinstance(result, BaseException):
            raise result
        return result


__all__ = ["DEFAULT_FX_RATE", "ReconciliationService"]
