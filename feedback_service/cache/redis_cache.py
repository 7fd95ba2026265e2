"""Redis backed response cache.

Values are stored with SET ... EX so expiry is left to Redis.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from feedback_service.core.errors import CacheError
from feedback_service.core.logging import get_logger

log = get_logger("cache.redis")

KEY_PREFIX = "feedback:http:"


class RedisCache:
    def __init__(self, client: redis.Redis, ttl_seconds: int = 60):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int = 60) -> "RedisCache":
        log.info(f"Connecting to Redis at {url}")
        # bytes in, bytes out
        return cls(redis.from_url(url, decode_responses=False), ttl_seconds)

    async def get(self, key: str) -> Optional[bytes]:
        try:
            value = await self.client.get(KEY_PREFIX + key)
        except RedisError as e:
            log.error(f"Redis get failed key={key}: {e}")
            raise CacheError(f"getting cache: {e}") from e

        if value is None:
            log.debug(f"Cache miss key={key}")
        return value

    async def set(self, key: str, value: bytes) -> None:
        try:
            await self.client.set(KEY_PREFIX + key, value, ex=self.ttl_seconds)
        except RedisError as e:
            log.error(f"Redis set failed key={key}: {e}")
            raise CacheError(f"setting cache: {e}") from e

    async def close(self) -> None:
        await self.client.aclose()
        log.info("Redis connection closed")
