"""Reusable FastAPI dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.core.config import Settings, get_settings
from cashup.infrastructure.database.session import get_session_factory as _get_session_factory
from cashup.modules.ledgers import KeywordCreditClassifier, LedgerAggregator
from cashup.modules.reconciliation import ReconciliationService
from cashup.modules.snapshots import SnapshotService


def get_app_settings() -> Settings:
    return get_settings()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return _get_session_factory()


def get_snapshot_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SnapshotService:
    return SnapshotService.with_session_factory(session_factory)


def get_ledger_aggregator(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    settings: Settings = Depends(get_app_settings),
) -> LedgerAggregator:
    return LedgerAggregator.with_session_factory(
        session_factory,
        tz=settings.tz,
        classifier=KeywordCreditClassifier(settings.reconciliation.credit_tokens),
        row_limit=settings.database.ledger_row_limit,
    )


def get_reconciliation_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    settings: Settings = Depends(get_app_settings),
) -> ReconciliationService:
    return ReconciliationService.with_session_factory(session_factory, settings)


__all__ = [
    "get_app_settings",
    "get_ledger_aggregator",
    "get_reconciliation_service",
    "get_session_factory",
    "get_snapshot_service",
]
