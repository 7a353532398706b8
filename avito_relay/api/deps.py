from __future__ import annotations

import httpx
from fastapi import Depends, Request

from avito_relay.core.config import Settings
from avito_relay.services.message_dispatch import MessageDispatcher
from avito_relay.services.store import MessageStore


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> MessageStore:
    return request.app.state.store


def get_avito_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    # None means httpx's default network transport.
    return getattr(request.app.state, "avito_transport", None)


def get_dispatcher(
    settings: Settings = Depends(get_settings_dep),
    store: MessageStore = Depends(get_store),
    transport: httpx.AsyncBaseTransport | None = Depends(get_avito_transport),
) -> MessageDispatcher:
    return MessageDispatcher(
        store=store,
        default_api_url=settings.avito_default_api_url,
        timeout=settings.avito_timeout_seconds,
        transport=transport,
    )
