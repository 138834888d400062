"""
Booking Quota API - Main Application Entry Point

An admission-control decision service for shared pools of bookable units:
- Real-time "is the pool full" snapshot for advisory checks
- Booking-set-aware check evaluated at the set's own logical start time
- Structured logging with request correlation
- Prometheus metrics on every decision
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI

from booking_quota.core.config import get_settings
from booking_quota.core.logging import setup_logging, get_logger
from booking_quota.core.metrics import metrics_endpoint
from booking_quota.api.router import api_router
from booking_quota.api.middleware import RequestLoggingMiddleware
from booking_quota.api.exception_handlers import register_exception_handlers
from booking_quota.infrastructure.redis_client import close_redis

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        quota_provider=settings.QUOTA_PROVIDER,
        booking_table=settings.BOOKING_TABLE,
    )

    yield

    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Quota decisions for concurrent multi-step booking sessions",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/metrics", tags=["Health"])
def metrics():
    return metrics_endpoint()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("booking_quota.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
