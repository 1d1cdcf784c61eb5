"""Tests for persisting the universe and reloading it from the store.

Uses in-memory SQLite (aiosqlite) in place of Postgres.

Run with:
    pytest tests/test_universe_store.py -v
"""
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from conftest import make_record, tickers
from apps.api_server.services.universe_store import (
    ScreenerCacheRepository,
    load_universe,
    refresh_universe,
)
from packages.database.session import create_tables
from packages.screener.seed import seed_records
from packages.screener.universe import UniverseProvider


class _CommitFailsSession(AsyncSession):
    async def commit(self):
        raise RuntimeError("commit failed")


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def provider():
    return UniverseProvider(ttl_seconds=3600, seed_when_empty=False)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Refresh then reload
# ─────────────────────────────────────────────────────────────────────────────

class TestRefreshAndReload:
    async def test_reload_matches_refreshed_snapshot(self, session, provider):
        # Feed order is deliberately not ticker order
        feed = list(reversed(seed_records()))
        count = await refresh_universe(session, feed, provider=provider)
        refreshed = provider.current

        provider.invalidate()
        reloaded = await load_universe(session, provider)

        assert count == len(feed)
        assert reloaded is not refreshed
        assert reloaded.source == "store"
        assert reloaded.version == refreshed.version
        assert tickers(reloaded.records) == tickers(refreshed.records)
        assert tickers(reloaded.records) == sorted(r.ticker for r in feed)

    async def test_successful_refresh_clears_query_cache(self, session, provider):
        query_cache = AsyncMock()
        query_cache.clear.return_value = 4

        await refresh_universe(
            session, [make_record("A")], provider=provider, query_cache=query_cache
        )

        query_cache.clear.assert_awaited_once()
        assert tickers(provider.current.records) == ["A"]

    async def test_records_persist_across_sessions(self, engine, session):
        await refresh_universe(session, [make_record("B"), make_record("A")])

        factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as other:
            records = await ScreenerCacheRepository(other).load_records()

        assert tickers(records) == ["A", "B"]


# ─────────────────────────────────────────────────────────────────────────────
# 2. Failed commit
# ─────────────────────────────────────────────────────────────────────────────

class TestFailedCommit:
    async def test_snapshot_and_cache_untouched(self, engine, provider):
        before = provider.replace([make_record("OLD")], source="test")
        query_cache = AsyncMock()

        factory = sessionmaker(
            bind=engine, class_=_CommitFailsSession, expire_on_commit=False
        )
        async with factory() as failing:
            with pytest.raises(RuntimeError, match="commit failed"):
                await refresh_universe(
                    failing,
                    [make_record("NEW")],
                    provider=provider,
                    query_cache=query_cache,
                )
            await failing.rollback()

        assert provider.current is before
        assert provider.current.version == before.version
        query_cache.clear.assert_not_awaited()

        # Nothing reached the store either
        factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as session:
            assert await ScreenerCacheRepository(session).load_records() == []
