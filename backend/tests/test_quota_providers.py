"""
Tests for static and Redis pool quota providers and provider selection.
"""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from booking_quota.core.config import Settings
from booking_quota.core.exceptions import QuotaConfigurationError, StoreUnavailable
from booking_quota.services.quota_factory import build_quota_service, get_quota_provider
from booking_quota.services.quota_providers import (
    RedisPoolQuotaProvider,
    SqlPoolQuotaProvider,
    StaticPoolQuotaProvider,
)


@pytest.mark.asyncio
async def test_static_provider():
    provider = StaticPoolQuotaProvider({"concert": 100, "free": None})

    assert await provider.get_limit("concert") == 100
    assert await provider.get_limit("free") is None
    assert await provider.get_limit("missing") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [-1, "lots", True, 2.5, float("inf")])
async def test_static_provider_rejects_invalid_limits(value):
    provider = StaticPoolQuotaProvider({"concert": value})

    with pytest.raises(QuotaConfigurationError):
        await provider.get_limit("concert")


@pytest.mark.asyncio
async def test_redis_provider_reads_prefixed_key():
    client = AsyncMock()
    client.get.return_value = "25"
    provider = RedisPoolQuotaProvider(client, key_prefix="quota:")

    assert await provider.get_limit("concert") == 25
    client.get.assert_awaited_once_with("quota:concert")


@pytest.mark.asyncio
async def test_redis_provider_missing_key_is_unlimited():
    client = AsyncMock()
    client.get.return_value = None

    assert await RedisPoolQuotaProvider(client).get_limit("concert") is None


@pytest.mark.asyncio
async def test_redis_provider_invalid_value():
    client = AsyncMock()
    client.get.return_value = "not-a-number"

    with pytest.raises(QuotaConfigurationError) as exc_info:
        await RedisPoolQuotaProvider(client).get_limit("concert")

    assert exc_info.value.value == "not-a-number"


@pytest.mark.asyncio
async def test_redis_provider_connection_error():
    client = AsyncMock()
    client.get.side_effect = RedisConnectionError("connection refused")

    with pytest.raises(StoreUnavailable) as exc_info:
        await RedisPoolQuotaProvider(client).get_limit("concert")

    assert exc_info.value.store == "redis"


def test_provider_selection():
    static = get_quota_provider(Settings(QUOTA_PROVIDER="static", STATIC_POOL_QUOTAS={"a": 1}))
    assert isinstance(static, StaticPoolQuotaProvider)
    assert static.limits == {"a": 1}

    assert isinstance(get_quota_provider(Settings(QUOTA_PROVIDER="redis")), RedisPoolQuotaProvider)
    assert isinstance(get_quota_provider(Settings(QUOTA_PROVIDER="SQL")), SqlPoolQuotaProvider)

    with pytest.raises(ValueError):
        get_quota_provider(Settings(QUOTA_PROVIDER="memcached"))


@pytest.mark.asyncio
async def test_static_provider_accepts_integral_float():
    assert await StaticPoolQuotaProvider({"concert": 3.0}).get_limit("concert") == 3


def test_provider_uses_explicit_redis_settings():
    provider = get_quota_provider(
        Settings(QUOTA_PROVIDER="redis", REDIS_URL="redis://quota-cache:6380/2", QUOTA_REDIS_KEY_PREFIX="q:")
    )

    kwargs = provider.client.connection_pool.connection_kwargs
    assert (kwargs["host"], kwargs["port"], kwargs["db"]) == ("quota-cache", 6380, 2)
    assert provider.key_prefix == "q:"


def test_service_uses_explicit_database_settings():
    settings = Settings(
        QUOTA_PROVIDER="sql",
        DATABASE_URL="sqlite+aiosqlite:///./explicit-quota.db",
        BOOKING_TABLE="reservations",
        BOOKING_POOL_ID_FIELD="venue_id",
    )
    service = build_quota_service(settings)

    assert str(service.store.session_factory.kw["bind"].url) == settings.DATABASE_URL
    # Limits and bookings are read through the same engine
    assert service.provider.session_factory is service.store.session_factory
    assert service.store.mapping.resource == "reservations"
    assert service.store.mapping.pool_id == "venue_id"
