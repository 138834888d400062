"""
SQLAlchemy implementation of the booking record store.

Queries run against a lightweight table construct built from the
FieldMapping, so the bookings table and its pool id column can carry the
names the booking service chose. Each call opens its own short session:
the anchor lookup and the count are independent reads, and writes landing
between them are accepted (check-then-act, see QuotaService).

The counting query mirrors the logical clock:

    WHERE pool_id = :pool AND (
        status IN (<uncut statuses>)
        OR (status IN (<cut statuses>) AND (
            status_datetime_utc < :t
            OR (status_datetime_utc = :t AND id <= :m)))
    )
"""

from typing import Callable, Iterable, Optional

from sqlalchemy import BigInteger, DateTime, String, and_, column, func, or_, select, table
from sqlalchemy.ext.asyncio import AsyncSession

from booking_quota.core.exceptions import StoreUnavailable
from booking_quota.db.errors import DATABASE_UNAVAILABLE_ERRORS
from booking_quota.domain.clock import LogicalCutoff
from booking_quota.domain.status import BookingStatus
from booking_quota.schemas.booking import BookingRecord, FieldMapping
from booking_quota.services.interfaces.record_store import BookingRecordStore


class SqlBookingRecordStore(BookingRecordStore):
    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        mapping: Optional[FieldMapping] = None,
    ):
        self.session_factory = session_factory
        self.mapping = mapping or FieldMapping()
        self.bookings = table(
            self.mapping.resource,
            column("id", BigInteger),
            column(self.mapping.pool_id, String),
            column("booking_set_id", String),
            column("status", String),
            column("status_datetime_utc", DateTime),
        )
        self.pool_id = self.bookings.c[self.mapping.pool_id]

    async def count(
        self,
        pool_id: str,
        statuses: Iterable[BookingStatus],
        cutoff: Optional[LogicalCutoff] = None,
    ) -> int:
        statuses = frozenset(statuses)
        c = self.bookings.c
        if cutoff is None:
            status_clause = c.status.in_(_values(statuses))
        else:
            at, record_id = cutoff.timestamp.at, cutoff.timestamp.record_id
            cut = statuses & cutoff.statuses
            clauses = []
            if statuses - cut:
                clauses.append(c.status.in_(_values(statuses - cut)))
            if cut:
                clauses.append(
                    and_(
                        c.status.in_(_values(cut)),
                        or_(
                            c.status_datetime_utc < at,
                            and_(c.status_datetime_utc == at, c.id <= record_id),
                        ),
                    )
                )
            status_clause = or_(*clauses) if clauses else c.status.in_([])

        query = (
            select(func.count())
            .select_from(self.bookings)
            .where(self.pool_id == pool_id, status_clause)
        )
        async with self.session_factory() as session:
            try:
                return (await session.execute(query)).scalar_one()
            except DATABASE_UNAVAILABLE_ERRORS as e:
                raise StoreUnavailable("booking store", e) from e

    async def find_latest_by_key(self, pool_id: str, booking_set_id: str) -> Optional[BookingRecord]:
        c = self.bookings.c
        query = (
            select(
                c.id,
                self.pool_id.label("pool_id"),
                c.booking_set_id,
                c.status,
                c.status_datetime_utc,
            )
            .where(self.pool_id == pool_id, c.booking_set_id == booking_set_id)
            # Relies on ids being assigned in creation order store-wide
            .order_by(c.id.desc())
            .limit(1)
        )
        async with self.session_factory() as session:
            try:
                row = (await session.execute(query)).mappings().first()
            except DATABASE_UNAVAILABLE_ERRORS as e:
                raise StoreUnavailable("booking store", e) from e

        if row is None:
            return None
        return BookingRecord.model_validate(dict(row))


def _values(statuses: Iterable[BookingStatus]) -> list[str]:
    return sorted(s.value for s in statuses)
