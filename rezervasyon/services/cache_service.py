"""
Redis caching service for trip listings.

What we cache:
  - Trip listing responses (JSON-serialized), one key per distinct filter
  - Cache key pattern: "trips:list:<sorted query params>"

Invalidation strategy:
  - On trip creation or deletion: delete all "trips:list:*" keys
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)
  - Reservations do not change listings, so they do not invalidate

Seat maps are never cached: confirmation must see the live reserved set.

Redis is optional. When disabled or unreachable every call degrades to a
miss / no-op and the API reads straight from the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from rezervasyon.core.config import get_settings
from rezervasyon.core.logging import get_logger
from rezervasyon.core.metrics import record_cache_operation

logger = get_logger(__name__)
settings = get_settings()

TRIP_LIST_PREFIX = "trips:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def make_trip_list_key(params: dict) -> str:
    parts = [f"{name}={value}" for name, value in sorted(params.items()) if value is not None]
    return TRIP_LIST_PREFIX + "&".join(parts)


async def get_cached_trips(params: dict) -> Optional[dict]:
    """Retrieve cached trip list response."""
    client = await get_redis()
    if not client:
        return None

    key = make_trip_list_key(params)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=bool(data))
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_trips(params: dict, data: dict) -> None:
    """Cache trip list response with TTL."""
    client = await get_redis()
    if not client:
        return

    key = make_trip_list_key(params)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str, ensure_ascii=False))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_trip_cache() -> None:
    """
    Invalidate all cached trip listings.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=TRIP_LIST_PREFIX + "*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
