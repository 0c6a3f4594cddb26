"""
Redis fixed-window rate limiting for unauthenticated endpoints
(the public proposal links).
"""

import logging
from typing import Optional

import redis
from fastapi import Request

from . import config
from .shared.errors import ServiceUnavailable, TooManyRequests

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """Get or create the shared Redis client"""
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection for rate limiting...")
        redis_client = redis.from_url(
            config.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
    return redis_client


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: redis.Redis
) -> tuple[bool, int, int]:
    """
    Count a request against a fixed window.

    Returns:
        (is_allowed, current_count, ttl_seconds)
    """
    pipe = client.pipeline()
    pipe.incr(key)
    pipe.ttl(key)
    current_count, ttl = pipe.execute()
    if ttl is None or ttl < 0:
        # First hit in this window
        client.expire(key, window_seconds)
        ttl = window_seconds
    return current_count <= limit, current_count, ttl


async def rate_limit_dependency(
    request: Request,
    limit: int,
    window_seconds: int,
    key_prefix: str = "rate_limit",
    use_ip: bool = True,
):
    """
    FastAPI dependency for rate limiting

    Args:
        request: FastAPI request object
        limit: Maximum requests allowed
        window_seconds: Time window in seconds
        key_prefix: Prefix for Redis key
        use_ip: If True, use client IP in key (per-IP limit), otherwise global
    """
    if not config.RATE_LIMIT_ENABLED:
        return

    key = f"{key_prefix}:{get_client_ip(request) if use_ip else 'global'}"
    try:
        is_allowed, current_count, ttl = check_rate_limit(
            key, limit, window_seconds, get_redis_client()
        )
    except redis.RedisError as e:
        logger.error(f"❌ Rate limiting error: {str(e)}")
        logger.warning("🔒 Denying request due to rate limiting error (fail-closed mode)")
        raise ServiceUnavailable("Rate limiting service temporarily unavailable") from e

    if not is_allowed:
        logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
        raise TooManyRequests(
            retry_after=ttl,
            message="Rate limit exceeded",
            detail=f"Maximum {limit} requests per {window_seconds} seconds.",
        )


def create_rate_limiter(
    limit: int, window_seconds: int, key_prefix: str = "rate_limit", use_ip: bool = True
):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        public_quote_limit = create_rate_limiter(limit=60, window_seconds=60, key_prefix="public_quote")

        @router.get("/{token}")
        async def view(token: str, _: None = Depends(public_quote_limit)):
            ...
    """

    async def rate_limiter(request: Request):
        return await rate_limit_dependency(request, limit, window_seconds, key_prefix, use_ip)

    return rate_limiter
