from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from avito_relay.api.health import router as health_router
from avito_relay.api.v1.api import api_router
from avito_relay.core.config import Settings, get_settings
from avito_relay.core.log_config import configure_logging
from avito_relay.db.session import create_engine_from_settings, create_session_maker
from avito_relay.services.store import SqlMessageStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Ensure models are imported before creating tables.
    import avito_relay.models  # noqa: F401
    from avito_relay.models.base import Base

    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Avito relay started")

    yield

    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the relay app. Settings are validated before anything else."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Avito Message Relay", lifespan=lifespan)

    engine = create_engine_from_settings(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    app.state.store = SqlMessageStore(app.state.session_maker)
    app.state.avito_transport = None

    # Mount API router with /api prefix so paths are /api/v1/...
    app.include_router(api_router, prefix="/api")
    app.include_router(health_router)
    return app


app = create_app()
