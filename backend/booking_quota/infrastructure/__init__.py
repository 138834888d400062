"""
Infrastructure layer - external system integrations.
Keeps the quota engine clean from storage details.
"""

from .redis_client import get_redis, close_redis
from .sql_store import SqlBookingRecordStore
from .memory_store import InMemoryBookingRecordStore

__all__ = ['get_redis', 'close_redis', 'SqlBookingRecordStore', 'InMemoryBookingRecordStore']
