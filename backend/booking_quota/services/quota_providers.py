"""
Pool quota providers.

The quota engine never owns or caches limits: every check asks the
provider again, so a limit change applies to the next decision.
"""

from typing import Callable, Mapping, Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_quota.core.exceptions import QuotaConfigurationError, StoreUnavailable
from booking_quota.db.errors import DATABASE_UNAVAILABLE_ERRORS
from booking_quota.models.pool_quota import PoolQuota
from booking_quota.services.interfaces.pool_quota import PoolQuotaProvider


def _as_limit(pool_id: str, value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise QuotaConfigurationError(pool_id, value)
    if isinstance(value, float) and not value.is_integer():
        raise QuotaConfigurationError(pool_id, value)
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise QuotaConfigurationError(pool_id, value) from None
    if limit < 0:
        raise QuotaConfigurationError(pool_id, value)
    return limit


class StaticPoolQuotaProvider(PoolQuotaProvider):
    """Limits from a fixed mapping. Pools absent from the mapping are unlimited."""

    def __init__(self, limits: Mapping[str, Optional[int]]):
        self.limits = limits

    async def get_limit(self, pool_id: str) -> Optional[int]:
        return _as_limit(pool_id, self.limits.get(pool_id))


class SqlPoolQuotaProvider(PoolQuotaProvider):
    """Limits from the pool_quotas table. Missing row or NULL quota means unlimited."""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def get_limit(self, pool_id: str) -> Optional[int]:
        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    select(PoolQuota.quota).where(PoolQuota.pool_id == str(pool_id))
                )
            except DATABASE_UNAVAILABLE_ERRORS as e:
                raise StoreUnavailable("pool quota store", e) from e
            return _as_limit(pool_id, result.scalar_one_or_none())


class RedisPoolQuotaProvider(PoolQuotaProvider):
    """
    Limits stored as plain Redis strings under "{key_prefix}{pool_id}".
    A missing key means unlimited.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "pool_quota:"):
        self.client = client
        self.key_prefix = key_prefix

    async def get_limit(self, pool_id: str) -> Optional[int]:
        try:
            value = await self.client.get(f"{self.key_prefix}{pool_id}")
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise StoreUnavailable("redis", e) from e
        return _as_limit(pool_id, value)
