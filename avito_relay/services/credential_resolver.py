"""
Resolve which Avito API credentials a send request uses.

Tiers run in order and the first one that yields credentials wins:

1. the active credential record of ``userId``;
2. the credential record joined to ``integrationId``.

The tiers treat store errors differently. A tier-1 error (anything but
"not found") aborts the request. A tier-2 error only means "nothing from
this tier" and resolution moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from avito_relay.core.errors import CredentialLookupError
from avito_relay.schemas.message import SendMessageRequest
from avito_relay.services.store import LookupStatus, MessageStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    api_key: str
    api_url: str

    @classmethod
    def from_record(cls, record: Any, *, default_api_url: str) -> "Credentials":
        return cls(
            api_key=record.api_key,
            api_url=record.api_url or default_api_url,
        )


Tier = Callable[[SendMessageRequest], Awaitable["Credentials | None"]]


class CredentialResolver:
    def __init__(self, store: MessageStore, *, default_api_url: str) -> None:
        self.store = store
        self.default_api_url = default_api_url
        self.tiers: tuple[Tier, ...] = (self.from_user, self.from_integration)

    async def resolve(self, request: SendMessageRequest) -> Credentials | None:
        for tier in self.tiers:
            creds = await tier(request)
            if creds is not None:
                return creds
        return None

    async def from_user(self, request: SendMessageRequest) -> Credentials | None:
        if not request.user_id:
            return None

        result = await self.store.find_active_credential_by_user(request.user_id)
        if result.status is LookupStatus.ERROR:
            logger.error(
                f"Error fetching user credentials for user {request.user_id}: {result.error!r}"
            )
            raise CredentialLookupError(result.error)
        if result.status is LookupStatus.NOT_FOUND or result.record is None:
            return None
        return Credentials.from_record(result.record, default_api_url=self.default_api_url)

    async def from_integration(self, request: SendMessageRequest) -> Credentials | None:
        if not request.integration_id:
            return None

        result = await self.store.find_integration_with_credential(request.integration_id)
        if result.status is LookupStatus.ERROR:
            # Not fatal, unlike tier 1.
            logger.warning(
                f"Ignoring integration lookup error for {request.integration_id}: {result.error!r}"
            )
            return None
        if result.status is LookupStatus.NOT_FOUND:
            return None

        credential = getattr(result.record, "credential", None)
        if credential is None:
            return None
        return Credentials.from_record(credential, default_api_url=self.default_api_url)
