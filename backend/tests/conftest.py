"""
Pytest fixtures for quota engine, stores and API client.

Engine tests run against the in-memory record store. SQL store tests use
TEST_DATABASE_URL (an in-memory SQLite database by default), with tables
created and dropped per test for isolation.
"""

import os
from datetime import datetime, timedelta
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from booking_quota.db.base import Base
from booking_quota.domain.status import BookingStatus
from booking_quota.infrastructure.memory_store import InMemoryBookingRecordStore
from booking_quota.main import app
from booking_quota.models import Booking, PoolQuota  # noqa: F401 - register tables
from booking_quota.schemas.booking import BookingRecord
from booking_quota.services.quota_factory import get_quota_service
from booking_quota.services.quota_providers import StaticPoolQuotaProvider
from booking_quota.services.quota_service import QuotaService

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

BASE_TIME = datetime(2026, 3, 1, 12, 0, 0)


def at(seconds: int) -> datetime:
    """Status timestamp `seconds` after a fixed base time."""
    return BASE_TIME + timedelta(seconds=seconds)


@pytest.fixture
def make_record() -> Callable[..., BookingRecord]:
    """Build booking records; ids default to an increasing sequence."""
    counter = {"next_id": 1}

    def _make(
        booking_set_id: str,
        status: BookingStatus = BookingStatus.PREBOOKED,
        t: int = 0,
        id: int = None,
        pool_id: str = "pool-1",
    ) -> BookingRecord:
        if id is None:
            id = counter["next_id"]
        counter["next_id"] = max(counter["next_id"], id) + 1
        return BookingRecord(
            id=id,
            pool_id=pool_id,
            booking_set_id=booking_set_id,
            status=status,
            status_datetime_utc=at(t),
        )

    return _make


@pytest.fixture
def store() -> InMemoryBookingRecordStore:
    return InMemoryBookingRecordStore()


@pytest.fixture
def limits() -> dict:
    """Pool limits used by the `service` fixture. Tests mutate it freely."""
    return {"pool-1": 2}


@pytest.fixture
def service(store: InMemoryBookingRecordStore, limits: dict) -> QuotaService:
    return QuotaService(StaticPoolQuotaProvider(limits), store)


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create tables, yield engine, then drop tables for isolation."""
    kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        kwargs = {"poolclass": StaticPool}
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def client(service: QuotaService) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the quota service bound to the in-memory store."""
    app.dependency_overrides[get_quota_service] = lambda: service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
