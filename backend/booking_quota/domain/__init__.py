"""
Domain layer - booking statuses and the logical clock.
No I/O, no framework imports.
"""

from .status import BookingStatus, StatusClass, classify
from .clock import LogicalTimestamp, LogicalCutoff

__all__ = ['BookingStatus', 'StatusClass', 'classify', 'LogicalTimestamp', 'LogicalCutoff']
