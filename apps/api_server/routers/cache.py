# apps/api_server/routers/cache.py

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api_server.core.auth import require_user_or_cron
from apps.api_server.core.limiter import limiter
from apps.api_server.dependencies.database import get_cache_repository, get_session
from apps.api_server.dependencies.screener import get_query_cache, get_universe_provider
from apps.api_server.schemas.screener import CacheRefreshResult, CacheStatus
from apps.api_server.services.universe_store import (
    ScreenerCacheRepository,
    refresh_universe,
)
from packages.quant_lib.config import settings
from packages.quant_lib.logging import get_logger
from packages.screener.cache import QueryCache
from packages.screener.seed import seed_records
from packages.screener.universe import UniverseProvider

logger = get_logger("screener_cache")

router = APIRouter(prefix="/screener/cache", tags=["Screener Cache"])


@router.post("", response_model=CacheRefreshResult, summary="Refresh the Screener Universe")
@limiter.limit(settings.screener.admin_rate_limit)
async def refresh_screener_cache(
    request: Request,  # Required for limiter
    caller: str = Depends(require_user_or_cron),
    session: AsyncSession = Depends(get_session),
    provider: UniverseProvider = Depends(get_universe_provider),
    query_cache: QueryCache = Depends(get_query_cache),
):
    """
    Rewrites the screener_cache table. Called by the scheduler (Bearer secret)
    or a signed-in admin. The seed feed stands in for a live data source.
    """
    logger.info(f"Screener cache refresh requested by {caller}")
    count = await refresh_universe(session, seed_records(), provider, query_cache)

    return CacheRefreshResult(
        success=True,
        message="Cache updated successfully",
        stocks_updated=count,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("", response_model=CacheStatus, summary="Screener Cache Status")
async def get_screener_cache_status(
    repo: ScreenerCacheRepository = Depends(get_cache_repository),
):
    age = await repo.cache_age_minutes()

    return CacheStatus(
        cache_age_minutes=age,
        last_updated=f"{age} minutes ago" if age is not None else "Never",
        is_stale=age is not None and age > settings.screener.stale_after_minutes,
    )
