from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

# The module-level app in avito_relay.main validates settings on import.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_SERVICE_KEY", "test-service-key")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from avito_relay.api.deps import get_avito_transport, get_store  # noqa: E402
from avito_relay.core.config import Settings, load_settings  # noqa: E402
from avito_relay.db.session import create_session_maker  # noqa: E402
from avito_relay.main import create_app  # noqa: E402
import avito_relay.models  # noqa: F401, E402 - ensure models are imported for metadata
from avito_relay.models.base import Base  # noqa: E402
from avito_relay.services.store import LookupResult  # noqa: E402


def credential(api_key: str, api_url: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(api_key=api_key, api_url=api_url)


class FakeStore:
    """In-memory MessageStore that records every call."""

    def __init__(self) -> None:
        self.user_credentials: dict[str, Any] = {}
        self.integrations: dict[str, Any] = {}
        self.user_error: BaseException | None = None
        self.integration_error: BaseException | None = None
        self.raise_on_lookup: BaseException | None = None
        self.fail_inserts = False
        self.lookups: list[tuple[str, str]] = []
        self.inserted: list[dict[str, Any]] = []

    async def find_active_credential_by_user(self, user_id: str) -> LookupResult:
        self.lookups.append(("user", user_id))
        if self.raise_on_lookup is not None:
            raise self.raise_on_lookup
        if self.user_error is not None:
            return LookupResult.failed(self.user_error)
        record = self.user_credentials.get(user_id)
        return LookupResult.found(record) if record else LookupResult.not_found()

    async def find_integration_with_credential(self, integration_id: str) -> LookupResult:
        self.lookups.append(("integration", integration_id))
        if self.integration_error is not None:
            return LookupResult.failed(self.integration_error)
        record = self.integrations.get(integration_id)
        return LookupResult.found(record) if record else LookupResult.not_found()

    async def insert_outgoing_message(self, **kwargs: Any) -> None:
        if self.fail_inserts:
            raise RuntimeError("insert failed")
        self.inserted.append(kwargs)

    def add_user(self, user_id: str, api_key: str, api_url: str | None = None) -> None:
        self.user_credentials[user_id] = credential(api_key, api_url)

    def add_integration(
        self, integration_id: str, api_key: str, api_url: str | None = None
    ) -> None:
        self.integrations[integration_id] = SimpleNamespace(
            id=integration_id, credential=credential(api_key, api_url)
        )


class UpstreamStub:
    """Stands in for the Avito API via httpx.MockTransport."""

    def __init__(self) -> None:
        self.status_code = 200
        self.json_body: Any = {"id": "msg-1", "status": "sent"}
        self.text: str | None = None
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)


@pytest.fixture()
def settings() -> Settings:
    return load_settings(
        database_url="sqlite+aiosqlite:///:memory:",
        database_service_key="test-service-key",
        _env_file=None,
    )


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture()
def client(
    settings: Settings, store: FakeStore, upstream: UpstreamStub
) -> Iterator[TestClient]:
    app = create_app(settings)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_avito_transport] = lambda: upstream.transport
    # Entering the client runs the lifespan, which disposes the engine on exit.
    with TestClient(app) as c:
        yield c


@pytest.fixture()
async def session_maker() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_maker(engine)
    await engine.dispose()
