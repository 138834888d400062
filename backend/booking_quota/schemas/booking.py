"""
Pydantic schemas for booking records as seen by the quota engine.
"""

from datetime import datetime
from typing import Annotated, Any, Mapping, Optional, Union
from pydantic import BaseModel, Field

from booking_quota.domain.clock import LogicalTimestamp
from booking_quota.domain.status import BookingStatus


class BookingRecord(BaseModel):
    """One booked unit. Written by the booking service, read-only here."""

    id: int
    pool_id: str
    booking_set_id: str
    # Statuses outside the enum are kept as raw strings (never counted)
    status: Annotated[Union[BookingStatus, str], Field(union_mode="left_to_right")]
    status_datetime_utc: datetime

    model_config = {"from_attributes": True, "frozen": True, "coerce_numbers_to_str": True}

    @property
    def logical_timestamp(self) -> LogicalTimestamp:
        return LogicalTimestamp(self.status_datetime_utc, self.id)


class FieldMapping(BaseModel):
    """Names of the bookings table and its pool id column."""

    resource: str = "bookings"
    pool_id: str = "pool_id"

    model_config = {"frozen": True}

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]]) -> "FieldMapping":
        """
        Build from a nested mapping config:
            {"bookings": {"resource": "...", "fields": {"pool_id": "..."}}}
        Missing keys keep the defaults.
        """
        bookings = (cfg or {}).get("bookings", {})
        values = {}
        if "resource" in bookings:
            values["resource"] = bookings["resource"]
        if "pool_id" in bookings.get("fields", {}):
            values["pool_id"] = bookings["fields"]["pool_id"]
        return cls(**values)
