"""
Redis Configuration

Async Redis client for the GPA thresholds cache and rate limiting.
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from division_sms.core.config import settings

logger = logging.getLogger(__name__)

# Redis client instance
redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Initialize Redis connection.

    Call this on application startup.
    """
    global redis_client
    redis_client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await redis_client.ping()
    return redis_client


def is_redis_available() -> bool:
    """Check if Redis client is initialized and available."""
    return redis_client is not None


async def cache_get_json(key: str) -> Any | None:
    """Read a JSON value from the cache. Returns None on miss or if Redis is down."""
    if redis_client is None:
        return None
    try:
        raw = await redis_client.get(key)
    except RedisError as e:
        logger.warning(f"Cache read failed for {key}: {e}")
        return None
    return json.loads(raw) if raw else None


async def cache_set_json(key: str, value: Any, ttl_seconds: int) -> None:
    """Write a JSON value to the cache with an expiry."""
    if redis_client is None:
        return
    try:
        await redis_client.set(key, json.dumps(value), ex=ttl_seconds)
    except RedisError as e:
        logger.warning(f"Cache write failed for {key}: {e}")


async def cache_delete(key: str) -> None:
    """Drop a cached value."""
    if redis_client is None:
        return
    try:
        await redis_client.delete(key)
    except RedisError as e:
        logger.warning(f"Cache delete failed for {key}: {e}")


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.close()
        redis_client = None
