from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.responses import JSONResponse

from avito_relay.api.deps import get_dispatcher, get_settings_dep, get_store
from avito_relay.core.config import Settings
from avito_relay.core.errors import RelayError
from avito_relay.services.message_dispatch import (
    MessageDispatcher,
    record_outgoing_message,
)
from avito_relay.services.store import MessageStore

router = APIRouter(prefix="/avito", tags=["avito"])
logger = logging.getLogger(__name__)


def _json_response(settings: Settings, status_code: int, content: Any) -> JSONResponse:
    # Every relay response carries the CORS headers, errors included.
    return JSONResponse(
        status_code=status_code, content=content, headers=settings.cors_headers()
    )


@router.options("/send-message", include_in_schema=False)
async def send_message_preflight(
    settings: Settings = Depends(get_settings_dep),
) -> Response:
    return Response(status_code=200, headers=settings.cors_headers())


@router.post("/send-message")
async def send_message(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings_dep),
    store: MessageStore = Depends(get_store),
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
) -> Response:
    try:
        body = await request.json()
        result = await dispatcher.dispatch(body)
    except RelayError as exc:
        return _json_response(settings, exc.status_code, exc.body())
    except Exception:
        logger.exception("Error sending message to Avito")
        return _json_response(settings, 500, {"error": "Internal server error"})

    # Audit write runs after the response; it cannot change the outcome.
    if result.audit is not None:
        background_tasks.add_task(record_outgoing_message, store, result.audit)

    return _json_response(settings, 200, result.response.model_dump(mode="json"))
