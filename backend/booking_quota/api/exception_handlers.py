"""
Maps quota errors to HTTP responses.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from booking_quota.core.exceptions import QuotaError
from booking_quota.core.logging import get_logger

logger = get_logger(__name__)


async def quota_error_handler(request: Request, exc: QuotaError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("quota_error", error=exc.message, error_type=type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuotaError, quota_error_handler)
