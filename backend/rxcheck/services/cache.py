"""
Redis cache utilities.
Uses the async redis client at settings.REDIS_URL. Falls back gracefully if
Redis is disabled or unavailable.
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis  # type: ignore

from rxcheck.config import get_settings

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None

KEY_PREFIX = "rxcheck"


def cache_key(*parts: str) -> str:
    """Namespaced cache key, e.g. rxcheck:openfda_label:aspirin."""
    return ":".join((KEY_PREFIX,) + parts)


async def get_redis_client() -> Optional[redis.Redis]:
    """Return a shared async Redis client if caching is enabled and reachable."""
    global _redis_client
    if _redis_client:
        return _redis_client

    settings = get_settings()
    if not settings.CACHE_ENABLED:
        return None

    try:
        client = redis.from_url(
            settings.REDIS_URL, encoding="utf-8", decode_responses=True
        )
        # quick ping to validate connection
        await client.ping()
        logger.info("Connected to Redis cache")
        _redis_client = client
        return _redis_client
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning(f"Redis not available ({exc}); caching disabled")
        return None


async def cache_get_json(key: str) -> Optional[Any]:
    """Cached JSON value, or None on a miss or when Redis is unavailable."""
    client = await get_redis_client()
    if not client:
        return None
    try:
        data = await client.get(key)
        return json.loads(data) if data else None
    except Exception as exc:  # pragma: no cover - network dependent
        logger.debug(f"Cache get failed for {key}: {exc}")
        return None


async def cache_set_json(key: str, value: Any, ttl_seconds: int = 3600) -> None:
    """Store a JSON-serializable value; a no-op when Redis is unavailable."""
    client = await get_redis_client()
    if not client:
        return
    try:
        await client.set(key, json.dumps(value), ex=ttl_seconds)
    except Exception as exc:  # pragma: no cover - network dependent
        logger.debug(f"Cache set failed for {key}: {exc}")
