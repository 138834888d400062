"""
Pool quota provider interface.
Resolves a pool to its configured capacity limit.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PoolQuotaProvider(ABC):
    """
    Interface for capacity limit lookups.

    Implementations:
    - StaticPoolQuotaProvider: limits from settings or a mapping
    - SqlPoolQuotaProvider: limits from the pool_quotas table
    - RedisPoolQuotaProvider: limits from Redis keys
    """

    @abstractmethod
    async def get_limit(self, pool_id: str) -> Optional[int]:
        """
        Get the capacity limit of a pool.

        Args:
            pool_id: Pool of bookable units

        Returns:
            The limit, or None when the pool is unlimited
        """
        pass
