"""
Send one chat message through the Avito API.

Order of work: validate the body, resolve credentials, send upstream and
build the success payload. The optional audit record is handed back to the
caller as a detached write so it can never change the outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from avito_relay.core.errors import (
    MissingFieldsError,
    NoCredentialsError,
    UpstreamSendError,
)
from avito_relay.schemas.message import SendMessageRequest, SendMessageResponse
from avito_relay.services.avito_service import send_avito_message, utc_now
from avito_relay.services.credential_resolver import CredentialResolver
from avito_relay.services.store import MessageStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditRecord:
    integration_id: str
    chat_id: str
    message_text: str


@dataclass(frozen=True)
class DispatchResult:
    response: SendMessageResponse
    audit: AuditRecord | None = None


def parse_send_request(body: Any) -> SendMessageRequest:
    if not isinstance(body, dict):
        raise MissingFieldsError()
    try:
        request = SendMessageRequest.model_validate(body)
    except ValidationError as exc:
        raise MissingFieldsError() from exc
    if not request.has_required_fields():
        raise MissingFieldsError()
    return request


class MessageDispatcher:
    def __init__(
        self,
        *,
        store: MessageStore,
        default_api_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.store = store
        self.resolver = CredentialResolver(store, default_api_url=default_api_url)
        self.timeout = timeout
        self.transport = transport

    async def dispatch(self, body: Any) -> DispatchResult:
        request = parse_send_request(body)

        credentials = await self.resolver.resolve(request)
        if credentials is None:
            raise NoCredentialsError()

        resp = await send_avito_message(
            credentials=credentials,
            chat_id=request.chat_id,
            message=request.message,
            timeout=self.timeout,
            transport=self.transport,
        )
        if not resp.is_success:
            logger.error(f"Avito API error: {resp.status_code} {resp.reason_phrase}")
            raise UpstreamSendError(resp.status_code, resp.text)

        audit = None
        if request.integration_id:
            audit = AuditRecord(
                integration_id=request.integration_id,
                chat_id=request.chat_id,
                message_text=request.message,
            )

        return DispatchResult(
            response=SendMessageResponse(avito_response=resp.json()),
            audit=audit,
        )


async def record_outgoing_message(store: MessageStore, audit: AuditRecord) -> None:
    """Best-effort audit write. Failures are logged, never raised."""
    try:
        await store.insert_outgoing_message(
            integration_id=audit.integration_id,
            chat_id=audit.chat_id,
            message_text=audit.message_text,
            timestamp=utc_now(),
        )
    except Exception:
        logger.exception(
            f"Failed to save outgoing message for integration {audit.integration_id}"
        )
