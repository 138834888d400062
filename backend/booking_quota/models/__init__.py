from booking_quota.models.booking import Booking
from booking_quota.models.pool_quota import PoolQuota

__all__ = ["Booking", "PoolQuota"]
