"""Tests for the request-boundary query cache.

Run with:
    pytest tests/test_cache.py -v
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from packages.screener.cache import (
    NullQueryCache,
    RedisQueryCache,
    build_query_cache,
)


def _counting_query(value):
    calls = {"n": 0}

    async def query_fn():
        calls["n"] += 1
        return value

    return query_fn, calls


@pytest.fixture
async def redis_cache():
    client = fakeredis.FakeAsyncRedis()
    cache = RedisQueryCache(client, prefix="test")
    yield cache
    await cache.close()


# ─────────────────────────────────────────────────────────────────────────────
# 1. Null cache
# ─────────────────────────────────────────────────────────────────────────────

class TestNullQueryCache:
    async def test_always_executes(self):
        cache = NullQueryCache()
        query_fn, calls = _counting_query({"total": 1})

        for _ in range(3):
            value, cached = await cache.cached_query("k", 60, query_fn)
            assert value == {"total": 1}
            assert cached is False

        assert calls["n"] == 3

    async def test_clear_is_noop(self):
        assert await NullQueryCache().clear() == 0


# ─────────────────────────────────────────────────────────────────────────────
# 2. Redis cache
# ─────────────────────────────────────────────────────────────────────────────

class TestRedisQueryCache:
    async def test_miss_then_hit(self, redis_cache):
        payload = {"total": 2, "results": [{"ticker": "AAPL", "pe_ratio": None}]}
        query_fn, calls = _counting_query(payload)

        first, first_cached = await redis_cache.cached_query("v1:q", 60, query_fn)
        second, second_cached = await redis_cache.cached_query("v1:q", 60, query_fn)

        assert (first_cached, second_cached) == (False, True)
        assert first == second == payload
        assert calls["n"] == 1

    async def test_distinct_keys_do_not_collide(self, redis_cache):
        fn_a, _ = _counting_query({"total": 1})
        fn_b, _ = _counting_query({"total": 2})

        await redis_cache.cached_query("v1:a", 60, fn_a)
        value, cached = await redis_cache.cached_query("v1:b", 60, fn_b)

        assert value == {"total": 2}
        assert cached is False

    async def test_ttl_is_set(self, redis_cache):
        query_fn, _ = _counting_query({"total": 0})
        await redis_cache.cached_query("v1:ttl", 45, query_fn)

        ttl = await redis_cache.client.ttl(redis_cache.make_key("v1:ttl"))
        assert 0 < ttl <= 45

    async def test_keys_are_hashed_and_prefixed(self, redis_cache):
        key = redis_cache.make_key('{"filters":{"sector":["Energy"]}}')
        assert key.startswith("test:query:")
        assert len(key.split(":")[-1]) == 40

    async def test_clear_removes_only_query_keys(self, redis_cache):
        for name in ("a", "b", "c"):
            fn, _ = _counting_query({"total": 0})
            await redis_cache.cached_query(name, 60, fn)
        await redis_cache.client.set("test:other", b"keep")

        removed = await redis_cache.clear()

        assert removed == 3
        assert await redis_cache.client.get("test:other") == b"keep"
        fn, calls = _counting_query({"total": 0})
        _, cached = await redis_cache.cached_query("a", 60, fn)
        assert cached is False

    async def test_query_errors_propagate(self, redis_cache):
        async def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await redis_cache.cached_query("v1:err", 60, broken)

    async def test_unreachable_redis_degrades_to_uncached(self):
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("refused")
        client.set.side_effect = RedisConnectionError("refused")
        cache = RedisQueryCache(client)
        query_fn, calls = _counting_query({"total": 5})

        value, cached = await cache.cached_query("v1:q", 60, query_fn)

        assert value == {"total": 5}
        assert cached is False
        assert calls["n"] == 1


class TestBuildQueryCache:
    def test_disabled_gives_null_cache(self):
        config = SimpleNamespace(enabled=False)
        assert isinstance(build_query_cache(config), NullQueryCache)

    def test_enabled_gives_redis_cache(self):
        config = SimpleNamespace(
            enabled=True,
            redis_url="redis://localhost:6379/0",
            key_prefix="screener",
            socket_timeout=0.5,
        )
        cache = build_query_cache(config)
        assert isinstance(cache, RedisQueryCache)
        assert cache.prefix == "screener"
