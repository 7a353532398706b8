"""
Credential and message store used by the relay.

Lookups report a three-way outcome (found / not found / error) instead of
raising, so each caller decides which outcomes are fatal.
"""

from __future__ import annotations

import datetime as dt
import enum
from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from avito_relay.crud.messaging_integration import get_integration_with_credential
from avito_relay.crud.outgoing_message import create_outgoing_message
from avito_relay.crud.user_credential import get_active_credential_for_user


class LookupStatus(str, enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    record: Any = None
    error: BaseException | None = None

    @classmethod
    def found(cls, record: Any) -> "LookupResult":
        return cls(LookupStatus.FOUND, record=record)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: BaseException) -> "LookupResult":
        return cls(LookupStatus.ERROR, error=error)


class MessageStore(Protocol):
    async def find_active_credential_by_user(self, user_id: str) -> LookupResult:
        """Record has api_key and api_url attributes."""
        ...

    async def find_integration_with_credential(self, integration_id: str) -> LookupResult:
        """Record has a credential attribute (api_key, api_url)."""
        ...

    async def insert_outgoing_message(
        self,
        *,
        integration_id: str,
        chat_id: str,
        message_text: str,
        timestamp: dt.datetime,
    ) -> None:
        ...


class SqlMessageStore:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self.session_maker = session_maker

    async def find_active_credential_by_user(self, user_id: str) -> LookupResult:
        try:
            async with self.session_maker() as session:
                cred = await get_active_credential_for_user(
                    session=session, user_id=user_id
                )
        except NoResultFound:
            return LookupResult.not_found()
        except Exception as e:
            return LookupResult.failed(e)
        return LookupResult.found(cred)

    async def find_integration_with_credential(self, integration_id: str) -> LookupResult:
        try:
            async with self.session_maker() as session:
                integ = await get_integration_with_credential(
                    session=session, integration_id=integration_id
                )
        except NoResultFound:
            return LookupResult.not_found()
        except Exception as e:
            return LookupResult.failed(e)
        return LookupResult.found(integ)

    async def insert_outgoing_message(
        self,
        *,
        integration_id: str,
        chat_id: str,
        message_text: str,
        timestamp: dt.datetime,
    ) -> None:
        async with self.session_maker() as session:
            await create_outgoing_message(
                session=session,
                integration_id=integration_id,
                chat_id=chat_id,
                message_text=message_text,
                timestamp=timestamp,
            )
