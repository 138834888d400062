"""
Quota service factory.
Configures where pool capacity limits and booking records are read from.

Without explicit settings the process-wide engine and Redis client are
shared. Explicit settings get their own engine and client, built from
those settings.
"""

from typing import Optional

from booking_quota.core.config import Settings, get_settings
from booking_quota.schemas.booking import FieldMapping
from booking_quota.services.interfaces.pool_quota import PoolQuotaProvider
from booking_quota.services.quota_providers import (
    RedisPoolQuotaProvider,
    SqlPoolQuotaProvider,
    StaticPoolQuotaProvider,
)
from booking_quota.services.quota_service import QuotaService


def _session_factory(settings: Optional[Settings]):
    from booking_quota.db import session

    if settings is None:
        return session.SessionLocal
    return session.make_session_factory(settings)


def _redis(settings: Optional[Settings]):
    from booking_quota.infrastructure import redis_client

    if settings is None:
        return redis_client.get_redis()
    return redis_client.make_redis(settings)


def get_quota_provider(settings: Optional[Settings] = None, session_factory=None) -> PoolQuotaProvider:
    """
    Get configured pool quota provider.

    Selected by the QUOTA_PROVIDER env var:
    - sql (default): pool_quotas table
    - redis: one key per pool
    - static: STATIC_POOL_QUOTAS mapping
    """
    effective = settings or get_settings()
    provider = effective.QUOTA_PROVIDER.lower()

    if provider == "redis":
        return RedisPoolQuotaProvider(_redis(settings), effective.QUOTA_REDIS_KEY_PREFIX)
    if provider == "static":
        return StaticPoolQuotaProvider(effective.STATIC_POOL_QUOTAS)
    if provider == "sql":
        return SqlPoolQuotaProvider(session_factory or _session_factory(settings))
    raise ValueError(f"Unknown QUOTA_PROVIDER: {effective.QUOTA_PROVIDER}")


def build_quota_service(settings: Optional[Settings] = None) -> QuotaService:
    """Wire the configured provider with the SQL booking record store."""
    from booking_quota.infrastructure.sql_store import SqlBookingRecordStore

    effective = settings or get_settings()
    session_factory = _session_factory(settings)
    mapping = FieldMapping.from_config(effective.booking_mapping_config())
    return QuotaService(
        get_quota_provider(settings, session_factory),
        SqlBookingRecordStore(session_factory, mapping),
    )


# Singleton instance
_service: Optional[QuotaService] = None


def get_quota_service() -> QuotaService:
    """Get quota service singleton (FastAPI dependency)."""
    global _service
    if _service is None:
        _service = build_quota_service()
    return _service
