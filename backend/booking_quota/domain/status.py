"""
Booking statuses and their quota classification.

Confirmed-class bookings always consume capacity. A hold that is about to
be cancelled still counts until the cancellation is final, otherwise the
pool could be oversold during the cancellation grace window.
Provisional-class bookings count only when they started no later than the
booking set being evaluated.
"""

import enum
from typing import Union


class BookingStatus(str, enum.Enum):
    PREBOOKED = "PREBOOKED"
    BOOKED = "BOOKED"
    PREBOOKING_ABOUT_TO_BE_CANCELLED = "PREBOOKING_ABOUT_TO_BE_CANCELLED"
    CANCELLED = "CANCELLED"
    RELEASED = "RELEASED"


class StatusClass(str, enum.Enum):
    CONFIRMED = "confirmed"
    PROVISIONAL = "provisional"
    IRRELEVANT = "irrelevant"


_CLASSIFICATION = {
    BookingStatus.BOOKED: StatusClass.CONFIRMED,
    BookingStatus.PREBOOKING_ABOUT_TO_BE_CANCELLED: StatusClass.CONFIRMED,
    BookingStatus.PREBOOKED: StatusClass.PROVISIONAL,
    BookingStatus.CANCELLED: StatusClass.IRRELEVANT,
    BookingStatus.RELEASED: StatusClass.IRRELEVANT,
}


def _check_exhaustive(classification) -> None:
    missing = set(BookingStatus) - set(classification)
    if missing:
        raise RuntimeError(f"Unclassified booking statuses: {sorted(s.value for s in missing)}")


# Fail at import time if a status is added without a classification
_check_exhaustive(_CLASSIFICATION)


def classify(status: Union[BookingStatus, str]) -> StatusClass:
    """Map a status (enum member or raw column value) to its quota class."""
    try:
        status = BookingStatus(status)
    except ValueError:
        return StatusClass.IRRELEVANT
    return _CLASSIFICATION[status]


def statuses_of(status_class: StatusClass) -> frozenset[BookingStatus]:
    return frozenset(s for s in BookingStatus if classify(s) is status_class)


CONFIRMED_STATUSES = statuses_of(StatusClass.CONFIRMED)
PROVISIONAL_STATUSES = statuses_of(StatusClass.PROVISIONAL)
COUNTED_STATUSES = CONFIRMED_STATUSES | PROVISIONAL_STATUSES
