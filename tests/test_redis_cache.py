"""Unit tests for the Redis cache backend with a mocked client."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from feedback_service.cache.redis_cache import KEY_PREFIX, RedisCache
from feedback_service.core.errors import CacheError


@pytest.fixture
def client():
    return AsyncMock()


@pytest.mark.asyncio
async def test_get_hit_and_miss(client):
    client.get.side_effect = [b"cached", None]
    cache = RedisCache(client, ttl_seconds=30)

    assert await cache.get("/feedback/1") == b"cached"
    assert await cache.get("/feedback/2") is None
    client.get.assert_any_await(KEY_PREFIX + "/feedback/1")


@pytest.mark.asyncio
async def test_set_uses_ttl(client):
    cache = RedisCache(client, ttl_seconds=45)

    await cache.set("/p-feedbacks?limit=2", b"[]")

    client.set.assert_awaited_once_with(KEY_PREFIX + "/p-feedbacks?limit=2", b"[]", ex=45)


@pytest.mark.asyncio
async def test_errors_become_cache_errors(client):
    client.get.side_effect = RedisConnectionError("refused")
    client.set.side_effect = RedisConnectionError("refused")
    cache = RedisCache(client)

    with pytest.raises(CacheError):
        await cache.get("k")
    with pytest.raises(CacheError):
        await cache.set("k", b"v")


@pytest.mark.asyncio
async def test_close(client):
    await RedisCache(client).close()

    client.aclose.assert_awaited_once()
