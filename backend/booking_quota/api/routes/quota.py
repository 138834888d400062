"""
Quota endpoints. Read-only and advisory: the booking service pairs the
answer with its own compensating writes.
"""

from fastapi import APIRouter, Depends

from booking_quota.schemas.quota import BookingSetQuotaResponse, PoolQuotaResponse
from booking_quota.services.quota_factory import get_quota_service
from booking_quota.services.quota_service import QuotaService

router = APIRouter(prefix="/pools", tags=["Quota"])


@router.get("/{pool_id}/quota", response_model=PoolQuotaResponse)
async def pool_quota(
    pool_id: str,
    service: QuotaService = Depends(get_quota_service),
):
    """Real-time check: is the pool full right now?"""
    decision = await service.evaluate(pool_id)
    return PoolQuotaResponse(
        pool_id=pool_id,
        limit=decision.limit,
        count=decision.count,
        reached=decision.reached,
    )


@router.get(
    "/{pool_id}/booking-sets/{booking_set_id}/quota",
    response_model=BookingSetQuotaResponse,
)
async def booking_set_quota(
    pool_id: str,
    booking_set_id: str,
    service: QuotaService = Depends(get_quota_service),
):
    """
    Would confirming this booking set exceed the pool's capacity, as of the
    booking set's own start? Returns 404 if the booking set has no record
    in the pool.
    """
    decision = await service.evaluate(pool_id, booking_set_id)
    return BookingSetQuotaResponse(
        pool_id=pool_id,
        booking_set_id=booking_set_id,
        limit=decision.limit,
        count=decision.count,
        over_quota=decision.reached,
        anchor_id=decision.anchor.record_id if decision.anchor else None,
        anchor_datetime_utc=decision.anchor.at if decision.anchor else None,
    )
