# apps/api_server/dependencies/screener.py

from fastapi import Depends

from apps.api_server.services.screener import ScreenerService
from packages.quant_lib.config import settings
from packages.screener.cache import QueryCache, build_query_cache
from packages.screener.engine import ScreenerEngine
from packages.screener.universe import UniverseProvider

# Process-wide singletons. Tests swap them through app.dependency_overrides.
universe_provider = UniverseProvider(
    ttl_seconds=settings.screener.universe_ttl_seconds,
    seed_when_empty=settings.screener.seed_when_empty,
)
query_cache: QueryCache = build_query_cache(settings.cache)
screener_engine = ScreenerEngine(max_limit=settings.screener.max_limit)


def get_universe_provider() -> UniverseProvider:
    return universe_provider


def get_query_cache() -> QueryCache:
    return query_cache


def get_engine() -> ScreenerEngine:
    return screener_engine


def get_screener_service(
    engine: ScreenerEngine = Depends(get_engine),
    cache: QueryCache = Depends(get_query_cache),
) -> ScreenerService:
    return ScreenerService(engine, cache, ttl_seconds=settings.cache.query_ttl_seconds)
