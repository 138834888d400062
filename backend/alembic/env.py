"""
Alembic migrations for the quota tables.

The quota service usually shares a database with the booking service,
which runs its own alembic history. Ours is kept in a separate version
table, and autogenerate leaves the bookings table alone: its columns
belong to the booking service, revision 001 only creates it for
standalone deployments.
"""

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from booking_quota.db.base import Base
from booking_quota.models import Booking, PoolQuota  # noqa: F401 - register tables for autogenerate
from booking_quota.core.config import get_settings

VERSION_TABLE = "booking_quota_alembic_version"

config = context.config
settings = get_settings()
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL_SYNC)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def include_object(obj, name, type_, reflected, compare_to):
    if type_ == "table" and name == settings.BOOKING_TABLE:
        return False
    if type_ in ("index", "column") and getattr(obj, "table", None) is not None:
        return obj.table.name != settings.BOOKING_TABLE
    return True


def configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        version_table=VERSION_TABLE,
        include_object=include_object,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the SQL script for the DBA instead of connecting."""
    configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
