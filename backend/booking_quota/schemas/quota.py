"""
Pydantic schemas for quota decision responses.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class PoolQuotaResponse(BaseModel):
    pool_id: str
    limit: Optional[int]
    count: Optional[int]
    reached: bool


class BookingSetQuotaResponse(BaseModel):
    pool_id: str
    booking_set_id: str
    limit: Optional[int]
    count: Optional[int]
    over_quota: bool
    anchor_id: Optional[int] = None
    anchor_datetime_utc: Optional[datetime] = None
