"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashup.core.config import Settings, get_settings
from cashup.infrastructure.database.session import get_engine, get_session_factory
from cashup.modules.reconciliation import ReconciliationService
from cashup.modules.snapshots import SnapshotService


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return get_session_factory()

    def snapshot_service(self) -> SnapshotService:
        return SnapshotService.with_session_factory(self.session_factory)

    def reconciliation_service(self) -> ReconciliationService:
        return ReconciliationService.with_session_factory(self.session_factory, self.settings)


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
