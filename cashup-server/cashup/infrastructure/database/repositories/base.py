"""Base class for repositories that open their own sessions."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class SessionFactoryRepository:
    """Repository holding a session factory.

    Every call opens a short-lived session, so independent reads can run
    concurrently without sharing one ``AsyncSession``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory
