from booking_quota.schemas.booking import BookingRecord, FieldMapping
from booking_quota.schemas.quota import PoolQuotaResponse, BookingSetQuotaResponse

__all__ = [
    "BookingRecord", "FieldMapping",
    "PoolQuotaResponse", "BookingSetQuotaResponse",
]
