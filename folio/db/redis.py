"""Redis client used for sessions, rate limiting and metrics."""

from typing import Optional

import redis.asyncio as aioredis

from folio.config import settings

redis_client: Optional[aioredis.Redis] = None


async def init_redis() -> None:
    """Connect to Redis and verify the connection."""
    global redis_client

    redis_client = aioredis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
    )
    await redis_client.ping()


async def close_redis() -> None:
    if redis_client:
        await redis_client.aclose()


def get_redis() -> aioredis.Redis:
    """Get Redis client instance."""
    if redis_client is None:
        raise RuntimeError("Redis is not initialized")
    return redis_client


async def cache_get(key: str) -> Optional[str]:
    """Get value from cache."""
    return await get_redis().get(key)


async def cache_set(key: str, value: str, expire: int = 300) -> None:
    """Set value in cache with expiration in seconds."""
    await get_redis().setex(key, expire, value)


async def cache_delete(key: str) -> None:
    """Delete key from cache."""
    await get_redis().delete(key)
