"""
Quota decision engine.

DECISION STRATEGY: Logical Cut at the Booking Set's Own Start
==============================================================

Problem:
  Many booking sessions hold units of the same pool at the same time.
  Each session first pre-books its units (PREBOOKED), then asks whether
  confirming them would exceed the pool's capacity. Answering "as of now"
  is unfair: a session that started later can make an earlier one fail,
  and two simultaneous sessions can each see the other as blocking.

Solution:
  Evaluate a booking set as of its own logical start time.

  1. Resolve the pool's limit. No limit configured -> never over quota.
  2. Anchor = record of the booking set (in this pool) with the greatest id.
     (T, M) = (anchor.status_datetime_utc, anchor.id)
  3. Count records of the pool that are either
     - BOOKED or PREBOOKING_ABOUT_TO_BE_CANCELLED (always), or
     - PREBOOKED with (status_datetime_utc, id) <= (T, M)
  4. Over quota iff count >= limit.

  (timestamp, id) is a total order because ids are store-wide monotonic,
  so every session sees the same consistent cut. The booking set always
  counts its own anchor.

  Usage is recomputed from the store on every call, there is no running
  counter to drift.

Race window:
  The limit lookup, the anchor lookup and the count are three separate
  reads. A confirmation can land between them. This is a check-then-act
  gate; exclusivity belongs to the booking service's write path.
"""

import time
from dataclasses import dataclass
from typing import Any, Optional

from booking_quota.core.exceptions import BookingSetNotFound, QuotaError
from booking_quota.core.logging import get_logger
from booking_quota.core.metrics import quota_check_latency, record_quota_check, record_quota_error
from booking_quota.domain.clock import LogicalCutoff, LogicalTimestamp
from booking_quota.domain.status import COUNTED_STATUSES, PROVISIONAL_STATUSES
from booking_quota.services.interfaces.pool_quota import PoolQuotaProvider
from booking_quota.services.interfaces.record_store import BookingRecordStore

logger = get_logger(__name__)

CHECK_REACHED = "reached"
CHECK_OVER_QUOTA = "over_quota"


@dataclass(frozen=True)
class QuotaDecision:
    pool_id: str
    limit: Optional[int]
    count: Optional[int]  # None when the pool is unlimited (store not queried)
    reached: bool
    booking_set_id: Optional[str] = None
    anchor: Optional[LogicalTimestamp] = None

    @property
    def unlimited(self) -> bool:
        return self.limit is None


class QuotaService:
    """
    Answers quota questions for a pool of bookable units.

    `context` is accepted by every check so quotas can later vary by
    caller profile. No policy uses it yet.
    """

    def __init__(self, provider: PoolQuotaProvider, store: BookingRecordStore):
        self.provider = provider
        self.store = store

    async def is_quota_reached(self, pool_id: str, context: Any = None) -> bool:
        """
        Real-time snapshot: is the pool full right now?

        Advisory only (UI hints, early rejection). Concurrent callers get
        no ordering guarantee, use is_over_quota before confirming.
        """
        decision = await self.evaluate(pool_id, context=context)
        return decision.reached

    async def is_over_quota(self, pool_id: str, booking_set_id: str, context: Any = None) -> bool:
        """
        Would confirming this booking set put the pool over capacity,
        evaluated as of the booking set's own logical start?

        The booking set's PREBOOKED records must already exist.

        Raises:
            BookingSetNotFound: the booking set has no record in the pool
        """
        decision = await self.evaluate(pool_id, booking_set_id, context=context)
        return decision.reached

    async def evaluate(
        self,
        pool_id: str,
        booking_set_id: Optional[str] = None,
        context: Any = None,
    ) -> QuotaDecision:
        """
        Compute the full decision. Without a booking set this is the
        real-time check, with one it is the booking-set-aware check.
        """
        check = CHECK_REACHED if booking_set_id is None else CHECK_OVER_QUOTA
        log = logger.bind(check=check, pool_id=pool_id, booking_set_id=booking_set_id)
        start = time.perf_counter()

        try:
            if booking_set_id is None:
                decision = await self._evaluate_now(pool_id)
            else:
                decision = await self._evaluate_booking_set(pool_id, booking_set_id, log)
        except QuotaError as e:
            record_quota_error(check, e)
            log.warning("quota_check_failed", error=e.message, error_type=type(e).__name__)
            raise
        finally:
            quota_check_latency.labels(check=check).observe(time.perf_counter() - start)

        record_quota_check(check, decision.reached, unlimited=decision.unlimited)
        log.info(
            "quota_checked",
            limit=decision.limit,
            count=decision.count,
            reached=decision.reached,
            has_context=context is not None,
        )
        return decision

    async def _evaluate_now(self, pool_id: str) -> QuotaDecision:
        limit = await self.provider.get_limit(pool_id)
        if limit is None:
            return QuotaDecision(pool_id=pool_id, limit=None, count=None, reached=False)

        count = await self.store.count(pool_id, COUNTED_STATUSES)
        return QuotaDecision(pool_id=pool_id, limit=limit, count=count, reached=count >= limit)

    async def _evaluate_booking_set(self, pool_id: str, booking_set_id: str, log) -> QuotaDecision:
        limit = await self.provider.get_limit(pool_id)
        if limit is None:
            return QuotaDecision(
                pool_id=pool_id,
                limit=None,
                count=None,
                reached=False,
                booking_set_id=booking_set_id,
            )

        # Greatest id assumes the set's units were inserted contiguously
        anchor_record = await self.store.find_latest_by_key(pool_id, booking_set_id)
        if anchor_record is None:
            raise BookingSetNotFound(pool_id, booking_set_id)

        anchor = anchor_record.logical_timestamp
        log.debug(
            "booking_set_anchor_resolved",
            anchor_id=anchor.record_id,
            anchor_datetime_utc=anchor.at.isoformat(),
            anchor_status=getattr(anchor_record.status, "value", anchor_record.status),
        )

        count = await self.store.count(
            pool_id,
            COUNTED_STATUSES,
            cutoff=LogicalCutoff(timestamp=anchor, statuses=PROVISIONAL_STATUSES),
        )
        return QuotaDecision(
            pool_id=pool_id,
            limit=limit,
            count=count,
            reached=count >= limit,
            booking_set_id=booking_set_id,
            anchor=anchor,
        )
