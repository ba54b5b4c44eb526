"""Alembic environment for the MeterPay schema.

The database URL is taken from ``Settings.database.url`` (env ``DATABASE__URL``).
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from meterpay.core.config import get_settings
from meterpay.db import models  # noqa: F401
from meterpay.infrastructure.database.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# async driver -> sync driver, for emitting offline SQL
SYNC_DRIVERS = {"aiosqlite": "", "asyncpg": "psycopg2"}


def offline_url() -> str:
    url = make_url(get_settings().database_url)
    backend, _, driver = url.drivername.partition("+")
    if driver in SYNC_DRIVERS:
        sync = SYNC_DRIVERS[driver]
        url = url.set(drivername=f"{backend}+{sync}" if sync else backend)
    return url.render_as_string(hide_password=False)


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    _configure(url=offline_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})


def _migrate(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place
    _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")


async def run_migrations_online() -> None:
    engine = create_async_engine(get_settings().database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
