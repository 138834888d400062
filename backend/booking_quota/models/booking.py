"""
Booking table as written by the external booking service.

Key design decisions:
- `id` must be store-wide monotonic: it breaks ties between records that
  share a status timestamp, so it cannot be a per-pool sequence
- `status` and `status_datetime_utc` are always updated together
- one row per booked unit; a booking set groups the rows of one session
- table and pool id column names come from settings (BOOKING_TABLE,
  BOOKING_POOL_ID_FIELD) so the model matches the booking service schema
"""

from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Index

from booking_quota.core.config import get_settings
from booking_quota.db.base import Base

settings = get_settings()


class Booking(Base):
    __tablename__ = settings.BOOKING_TABLE

    # BigInteger with an Integer variant so sqlite aliases it to ROWID
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    pool_id = Column(settings.BOOKING_POOL_ID_FIELD, String(64), nullable=False)
    booking_set_id = Column(String(64), nullable=False)
    status = Column(String(40), nullable=False)
    status_datetime_utc = Column(DateTime(timezone=False), nullable=False)

    __table_args__ = (
        # Anchor lookup: WHERE pool_id = ? AND booking_set_id = ? ORDER BY id DESC LIMIT 1
        Index("ix_bookings_pool_set_id", settings.BOOKING_POOL_ID_FIELD, "booking_set_id", "id"),
        # Counting: WHERE pool_id = ? AND status IN (...) AND (status_datetime_utc, id) <= (?, ?)
        Index("ix_bookings_pool_status_clock", settings.BOOKING_POOL_ID_FIELD, "status", "status_datetime_utc", "id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, pool={self.pool_id}, set={self.booking_set_id}, "
            f"status={self.status}, at={self.status_datetime_utc})>"
        )
