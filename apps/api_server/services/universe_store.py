# apps/api_server/services/universe_store.py

from datetime import datetime, timezone
from typing import Iterable, List, Optional
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from packages.database.models import ScreenerCacheRow
from packages.quant_lib.logging import get_logger
from packages.screener.cache import QueryCache
from packages.screener.models import StockRecord
from packages.screener.universe import UniverseProvider, UniverseSnapshot
from packages.screener.views import record_from_view, to_view_dict

logger = get_logger("universe_store")


class ScreenerCacheRepository:
    """Reads and replaces the persisted universe (screener_cache table)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load_records(self) -> List[StockRecord]:
        # Matches the ticker order UniverseSnapshot.build imposes
        stmt = select(ScreenerCacheRow.data).order_by(ScreenerCacheRow.ticker)
        result = await self.session.execute(stmt)
        return [record_from_view(row) for row in result.scalars().all()]

    async def replace_all(self, records: Iterable[StockRecord]) -> int:
        """Wholesale swap inside the caller's transaction."""
        rows = [
            ScreenerCacheRow(ticker=record.ticker, data=to_view_dict(record))
            for record in records
        ]

        await self.session.execute(delete(ScreenerCacheRow))
        self.session.add_all(rows)
        await self.session.flush()

        logger.info(f"Replaced screener cache with {len(rows)} rows")
        return len(rows)

    async def last_updated(self) -> Optional[datetime]:
        latest = await self.session.scalar(select(func.max(ScreenerCacheRow.updated_at)))
        if latest is not None and latest.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC
            latest = latest.replace(tzinfo=timezone.utc)
        return latest

    async def cache_age_minutes(self, now: Optional[datetime] = None) -> Optional[int]:
        latest = await self.last_updated()
        if latest is None:
            return None
        now = now or datetime.now(timezone.utc)
        return int((now - latest).total_seconds() // 60)


async def load_universe(
    session: AsyncSession, provider: UniverseProvider
) -> UniverseSnapshot:
    repo = ScreenerCacheRepository(session)
    return await provider.get_snapshot(repo.load_records)


async def refresh_universe(
    session: AsyncSession,
    records: Iterable[StockRecord],
    provider: Optional[UniverseProvider] = None,
    query_cache: Optional[QueryCache] = None,
) -> int:
    """
    Persists a new universe and commits it. Only after the commit succeeds
    does it (if given) swap the in-process snapshot and drop cached query
    results computed against the old one; a failed commit leaves both as
    they were.
    """
    records = list(records)
    count = await ScreenerCacheRepository(session).replace_all(records)
    await session.commit()

    if provider is not None:
        provider.replace(records, source="store")
    if query_cache is not None:
        removed = await query_cache.clear()
        logger.info(f"Cleared {removed} cached screener queries")

    return count
