"""
Per-client rate limiting using Redis (fixed window).
"""
import logging

from fastapi import Request

from rxcheck.config import get_settings
from rxcheck.exceptions import RateLimitError
from rxcheck.services.cache import cache_key, get_redis_client

logger = logging.getLogger(__name__)


async def rate_limit(request: Request, limit: int = 60, window_seconds: int = 60, key_prefix: str = "rl") -> None:
    """
    Apply a fixed-window rate limit based on client IP.

    Args:
        request: FastAPI request
        limit: allowed requests per window
        window_seconds: window size in seconds
        key_prefix: redis key prefix
    """
    client_ip = request.client.host if request.client else "unknown"
    key = cache_key(key_prefix, request.url.path, client_ip)

    client = await get_redis_client()
    if not client:
        return  # fail-open if no redis

    try:
        current = await client.incr(key)
        if current == 1:
            await client.expire(key, window_seconds)
    except Exception as exc:  # pragma: no cover - network dependent
        logger.debug(f"Rate limit check failed: {exc}")
        return

    if current > limit:
        logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
        raise RateLimitError()


async def upload_rate_limit(request: Request) -> None:
    """Dependency limiting prescription uploads per client."""
    await rate_limit(request, limit=get_settings().RATE_LIMIT_REQUESTS_PER_MIN)
