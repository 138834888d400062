"""
Booking record store interface.
Read-only access to the booking records written by the booking service.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from booking_quota.domain.clock import LogicalCutoff
from booking_quota.domain.status import BookingStatus
from booking_quota.schemas.booking import BookingRecord


class BookingRecordStore(ABC):
    """
    Interface for the queries the quota engine needs.

    Implementations:
    - SqlBookingRecordStore: one SQL query per call
    - InMemoryBookingRecordStore: a list of records held in process
    """

    @abstractmethod
    async def count(
        self,
        pool_id: str,
        statuses: Iterable[BookingStatus],
        cutoff: Optional[LogicalCutoff] = None,
    ) -> int:
        """
        Count the records of a pool whose status is in `statuses`.

        Args:
            pool_id: Pool of bookable units
            statuses: Statuses to count
            cutoff: Optional logical cutoff for some of those statuses

        Returns:
            Number of matching records
        """
        pass

    @abstractmethod
    async def find_latest_by_key(self, pool_id: str, booking_set_id: str) -> Optional[BookingRecord]:
        """
        Get the record of a booking set with the greatest id.

        Returns:
            The record, or None if the booking set has no record in the pool
        """
        pass
