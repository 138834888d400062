"""
Redis client for pool quota lookups.
Separated from business logic for clean architecture.
"""

from typing import Optional

import redis.asyncio as redis
from booking_quota.core.config import Settings, get_settings
from booking_quota.core.logging import get_logger

logger = get_logger(__name__)
_redis_client: Optional[redis.Redis] = None


def make_redis(settings: Optional[Settings] = None) -> redis.Redis:
    """Create a Redis client (connection pooled, lazy connect)."""
    settings = settings or get_settings()
    client = redis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        health_check_interval=30,
    )
    logger.info("redis_client_created", url=settings.REDIS_URL)
    return client


def get_redis() -> redis.Redis:
    """Get or create the shared Redis client."""
    global _redis_client

    if _redis_client is None:
        _redis_client = make_redis()
    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
