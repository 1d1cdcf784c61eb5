# packages/screener/cache.py

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Tuple

import orjson
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from packages.quant_lib.logging import get_logger

logger = get_logger("query_cache")

QueryFn = Callable[[], Awaitable[Any]]


class QueryCache(ABC):
    """
    Memoizes JSON-serializable query results at the request boundary.
    The screener engine never sees this object.
    """

    @abstractmethod
    async def cached_query(self, key: str, ttl: int, query_fn: QueryFn) -> Tuple[Any, bool]:
        """
        Returns (value, served_from_cache).
        query_fn must return something orjson can serialize.
        """
        pass

    @abstractmethod
    async def clear(self) -> int:
        """Drops every cached query. Returns the number of entries removed."""
        pass

    async def close(self) -> None:
        pass


class NullQueryCache(QueryCache):
    """Used when caching is disabled: always executes the query."""

    async def cached_query(self, key: str, ttl: int, query_fn: QueryFn) -> Tuple[Any, bool]:
        return await query_fn(), False

    async def clear(self) -> int:
        return 0


class RedisQueryCache(QueryCache):
    """
    Redis-backed cache. Keys are hashed so arbitrary query text stays short.

    Redis being unreachable degrades to an uncached query (logged), it never
    fails the request. Errors raised by query_fn itself propagate.
    """

    def __init__(self, client: aioredis.Redis, prefix: str = "screener"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "screener", socket_timeout: float = 0.5):
        client = aioredis.from_url(url, socket_timeout=socket_timeout)
        return cls(client, prefix=prefix)

    def make_key(self, key: str) -> str:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return f"{self.prefix}:query:{digest}"

    async def _get(self, redis_key: str) -> Optional[bytes]:
        try:
            return await self.client.get(redis_key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {redis_key}: {e}")
            return None

    async def _set(self, redis_key: str, value: Any, ttl: int) -> None:
        try:
            await self.client.set(redis_key, orjson.dumps(value), ex=ttl)
        except RedisError as e:
            logger.warning(f"Cache write failed for {redis_key}: {e}")

    async def cached_query(self, key: str, ttl: int, query_fn: QueryFn) -> Tuple[Any, bool]:
        redis_key = self.make_key(key)

        raw = await self._get(redis_key)
        if raw is not None:
            logger.debug(f"Cache hit: {redis_key}")
            return orjson.loads(raw), True

        value = await query_fn()
        await self._set(redis_key, value, ttl)
        return value, False

    async def clear(self) -> int:
        removed = 0
        try:
            async for redis_key in self.client.scan_iter(match=f"{self.prefix}:query:*"):
                removed += await self.client.delete(redis_key)
        except RedisError as e:
            logger.warning(f"Cache clear failed: {e}")
        return removed

    async def close(self) -> None:
        await self.client.aclose()


def build_query_cache(config) -> QueryCache:
    """Picks the cache implementation from a CacheConfig."""
    if not config.enabled:
        return NullQueryCache()

    logger.info(f"Query cache enabled (prefix '{config.key_prefix}')")
    return RedisQueryCache.from_url(
        config.redis_url,
        prefix=config.key_prefix,
        socket_timeout=config.socket_timeout,
    )
