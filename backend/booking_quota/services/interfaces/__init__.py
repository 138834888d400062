"""
Collaborator interfaces for dependency inversion.
The quota engine depends on these, never on a concrete store or provider.
"""

from .pool_quota import PoolQuotaProvider
from .record_store import BookingRecordStore

__all__ = ['PoolQuotaProvider', 'BookingRecordStore']
