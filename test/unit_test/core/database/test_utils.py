"""Tests for engine and session factory helpers."""

from __future__ import annotations

import pytest
from sqlalchemy import text

from campaign_portal.core.database import create_engine, create_sessionmaker


@pytest.mark.parametrize(
    "url",
    [
        "postgres://user:pw@db:5432/campaign",
        "postgresql://user:pw@db:5432/campaign",
        "postgresql+psycopg://user:pw@db:5432/campaign",
    ],
)
def test_postgres_urls_use_asyncpg(url):
    engine = create_engine(url)
    try:
        assert engine.url.drivername == "postgresql+asyncpg"
        assert engine.url.database == "campaign"
    finally:
        engine.sync_engine.dispose()


@pytest.mark.asyncio
async def test_sqlite_enforces_foreign_keys():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("PRAGMA foreign_keys"))
            assert result.scalar_one() == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_sessionmaker_keeps_objects_after_commit(in_memory_engine):
    maker = create_sessionmaker(in_memory_engine)
    assert maker.kw["expire_on_commit"] is False
