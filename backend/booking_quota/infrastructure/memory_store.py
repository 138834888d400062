"""
In-process booking record store.

Applies the same filtering rules as the SQL store over a list of
records. Useful for tests and for embedding the quota engine next to a
booking service that already holds its records in memory.
"""

from typing import Iterable, Optional

from booking_quota.domain.clock import LogicalCutoff
from booking_quota.domain.status import BookingStatus
from booking_quota.schemas.booking import BookingRecord
from booking_quota.services.interfaces.record_store import BookingRecordStore


class InMemoryBookingRecordStore(BookingRecordStore):
    def __init__(self, records: Iterable[BookingRecord] = ()):
        self.records: list[BookingRecord] = list(records)

    def add(self, record: BookingRecord) -> BookingRecord:
        self.records.append(record)
        return record

    async def count(
        self,
        pool_id: str,
        statuses: Iterable[BookingStatus],
        cutoff: Optional[LogicalCutoff] = None,
    ) -> int:
        values = {BookingStatus(s).value for s in statuses}
        total = 0
        for record in self.records:
            if record.pool_id != pool_id or _value(record.status) not in values:
                continue
            if cutoff is not None and not cutoff.admits(record.status, record.logical_timestamp):
                continue
            total += 1
        return total

    async def find_latest_by_key(self, pool_id: str, booking_set_id: str) -> Optional[BookingRecord]:
        matching = [
            r for r in self.records
            if r.pool_id == pool_id and r.booking_set_id == booking_set_id
        ]
        if not matching:
            return None
        return max(matching, key=lambda r: r.id)


def _value(status) -> str:
    return status.value if isinstance(status, BookingStatus) else status
