from __future__ import annotations

import datetime as dt

from sqlalchemy.ext.asyncio import AsyncSession

from avito_relay.models.outgoing_message import OutgoingMessage


async def create_outgoing_message(
    *,
    session: AsyncSession,
    integration_id: str,
    chat_id: str,
    message_text: str,
    timestamp: dt.datetime,
) -> OutgoingMessage:
    obj = OutgoingMessage(
        integration_id=integration_id,
        chat_id=chat_id,
        message_text=message_text,
        is_incoming=False,
        timestamp=timestamp,
    )
    session.add(obj)
    await session.commit()
    return obj
