from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

import avito_relay.models  # noqa: F401
from avito_relay.core.config import load_settings
from avito_relay.db.session import build_database_url
from avito_relay.models.base import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

store_url = build_database_url(load_settings())


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=Base.metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(store_url, poolclass=pool.NullPool)
    async with engine.connect() as conn:
        await conn.run_sync(lambda sync_conn: _configure_and_run(connection=sync_conn))
    await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(
        url=store_url.render_as_string(hide_password=False),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
