"""Bookings read model and pool quotas.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from booking_quota.core.config import get_settings

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

settings = get_settings()


def upgrade() -> None:
    pool_field = settings.BOOKING_POOL_ID_FIELD

    # Bookings table. Normally owned by the booking service; created here
    # for standalone deployments and tests.
    op.create_table(
        settings.BOOKING_TABLE,
        # Store-wide sequence: the quota engine uses id as its tie-breaker
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(pool_field, sa.String(64), nullable=False),
        sa.Column("booking_set_id", sa.String(64), nullable=False),
        sa.Column("status", sa.String(40), nullable=False),
        sa.Column("status_datetime_utc", sa.DateTime(timezone=False), nullable=False),
    )
    # Anchor lookup: latest record of a booking set in a pool
    op.create_index(
        "ix_bookings_pool_set_id",
        settings.BOOKING_TABLE,
        [pool_field, "booking_set_id", "id"],
    )
    # Counting: pool + status, then the (status_datetime_utc, id) logical clock
    op.create_index(
        "ix_bookings_pool_status_clock",
        settings.BOOKING_TABLE,
        [pool_field, "status", "status_datetime_utc", "id"],
    )

    op.create_table(
        "pool_quotas",
        sa.Column("pool_id", sa.String(64), primary_key=True),
        sa.Column("quota", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quota IS NULL OR quota >= 0", name="check_pool_quota_non_negative"),
    )


def downgrade() -> None:
    op.drop_table("pool_quotas")
    op.drop_table(settings.BOOKING_TABLE)
