from __future__ import annotations

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:////tmp/cashup-tests-app.db")
os.environ.setdefault("DATABASE__AUTO_CREATE", "false")

from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from cashup.infrastructure.database.session import build_session_factory, init_db

MOGADISHU = ZoneInfo("Africa/Mogadishu")


@pytest.fixture
def tz() -> ZoneInfo:
    return MOGADISHU


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'cashup.db'}"


@pytest_asyncio.fixture
async def session_factory(db_url):
    engine = create_async_engine(db_url, future=True)
    await init_db(engine)
    try:
        yield build_session_factory(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def empty_session_factory(db_url):
    """A database where no tables were ever created."""
    engine = create_async_engine(db_url, future=True)
    try:
        yield build_session_factory(engine)
    finally:
        await engine.dispose()
