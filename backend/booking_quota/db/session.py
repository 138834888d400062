"""
Async engine and session factory.

The quota engine only reads, so sessions are short-lived and never
committed: one session per store call.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from booking_quota.core.config import Settings, get_settings


def make_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    settings = settings or get_settings()
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_async_engine(url)
    return create_async_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


def make_session_factory(settings: Optional[Settings] = None) -> async_sessionmaker:
    return async_sessionmaker(make_engine(settings), class_=AsyncSession, expire_on_commit=False)


SessionLocal = make_session_factory()
