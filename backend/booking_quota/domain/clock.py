"""
Logical clock used to order booking records without a global lock.

Status timestamps have coarse resolution, so two records can share one.
The store-wide monotonic record id breaks those ties: (timestamp, id)
is a total order over every record in the store.
"""

from dataclasses import dataclass
from datetime import datetime

from booking_quota.domain.status import BookingStatus


@dataclass(frozen=True, order=True)
class LogicalTimestamp:
    at: datetime
    record_id: int


@dataclass(frozen=True)
class LogicalCutoff:
    """
    Restricts counting of records whose status is in `statuses` to those
    at or before `timestamp`. Other counted statuses are unaffected.
    """

    timestamp: LogicalTimestamp
    statuses: frozenset[BookingStatus]

    def admits(self, status: BookingStatus, timestamp: LogicalTimestamp) -> bool:
        if status not in self.statuses:
            return True
        return timestamp <= self.timestamp
