"""
Driver errors that mean the database could not answer, as opposed to a
bad query. Pool exhaustion (DB_POOL_TIMEOUT) surfaces as sqlalchemy's
TimeoutError.
"""

from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError

DATABASE_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError)
