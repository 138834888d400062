"""
Per-pool capacity limits. A NULL quota means the pool is unlimited.
"""

from sqlalchemy import Column, Integer, String, CheckConstraint

from booking_quota.db.base import Base, TimestampMixin


class PoolQuota(Base, TimestampMixin):
    __tablename__ = "pool_quotas"

    pool_id = Column(String(64), primary_key=True)
    quota = Column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint("quota IS NULL OR quota >= 0", name="check_pool_quota_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<PoolQuota(pool={self.pool_id}, quota={self.quota})>"
