# apps/api_server/services/screener.py

from typing import Any, Dict, Tuple

from packages.quant_lib.logging import get_logger
from packages.screener.cache import QueryCache
from packages.screener.engine import ScreenerEngine
from packages.screener.models import ScreenerQuery
from packages.screener.universe import UniverseSnapshot
from packages.screener.views import to_view_dict

logger = get_logger("screener_service")


class ScreenerService:
    """
    Boundary between HTTP and the pure engine: runs a parsed query against a
    snapshot and memoizes the serialized page in the query cache.
    """

    def __init__(self, engine: ScreenerEngine, cache: QueryCache, ttl_seconds: int):
        self.engine = engine
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def cache_key(snapshot: UniverseSnapshot, query: ScreenerQuery) -> str:
        # Versioned by content, so a refreshed universe never hits stale pages
        return f"{snapshot.version}:{query.cache_key()}"

    async def execute(
        self, snapshot: UniverseSnapshot, query: ScreenerQuery
    ) -> Tuple[Dict[str, Any], bool]:
        async def run_query() -> Dict[str, Any]:
            result = self.engine.run(snapshot.records, query)
            return {
                "total": result.total,
                "results": [to_view_dict(record) for record in result.results],
            }

        payload, cached = await self.cache.cached_query(
            self.cache_key(snapshot, query), self.ttl_seconds, run_query
        )

        logger.debug(
            f"Screener query matched {payload['total']} of {len(snapshot)} "
            f"(cached={cached}, template={query.template})"
        )
        return payload, cached
