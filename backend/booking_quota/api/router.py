"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from booking_quota.api.routes import quota

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(quota.router)
