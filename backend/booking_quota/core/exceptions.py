"""
Quota error taxonomy.

Every failure is a distinct exception so callers can tell
"quota not reached" apart from "could not determine quota".
The status_code is used by the API layer only.
"""


class QuotaError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BookingSetNotFound(QuotaError):
    """The booking set has no record in the pool. Caller error, never retried."""

    status_code = 404

    def __init__(self, pool_id: str, booking_set_id: str):
        self.pool_id = pool_id
        self.booking_set_id = booking_set_id
        super().__init__(f"Booking set {booking_set_id} not found in pool {pool_id}")


class StoreUnavailable(QuotaError):
    """A backing store (database, Redis) could not be reached."""

    status_code = 503

    def __init__(self, store: str, cause: Exception):
        self.store = store
        self.cause = cause
        super().__init__(f"{store} unavailable: {cause}")


class QuotaConfigurationError(QuotaError):
    """A pool quota is configured with a value that is not an integer."""

    def __init__(self, pool_id: str, value: object):
        self.pool_id = pool_id
        self.value = value
        super().__init__(f"Invalid quota {value!r} configured for pool {pool_id}")
