from __future__ import annotations

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from avito_relay.core.config import Settings


def build_database_url(settings: Settings) -> URL:
    """Store endpoint with the service key applied as the password."""
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        return url
    return url.set(password=settings.database_service_key)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    url = build_database_url(settings)
    connect_args: dict = {}
    if url.drivername == "postgresql+asyncpg":
        connect_args = {
            "timeout": settings.store_timeout_seconds,
            "command_timeout": settings.store_timeout_seconds,
        }
    return create_async_engine(url, pool_pre_ping=True, connect_args=connect_args)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
