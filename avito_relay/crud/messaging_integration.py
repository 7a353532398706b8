from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from avito_relay.models.messaging_integration import MessagingIntegration


async def get_integration_with_credential(
    *, session: AsyncSession, integration_id: str
) -> MessagingIntegration:
    # The credential relationship is an inner join, so an integration
    # without a credential raises NoResultFound here.
    res = await session.execute(
        select(MessagingIntegration).where(MessagingIntegration.id == integration_id)
    )
    return res.scalar_one()


async def create_integration(
    *,
    session: AsyncSession,
    user_id: str,
    credential_id: str | None,
    name: str,
    phone: str | None = None,
    auto_reply: bool = False,
) -> MessagingIntegration:
    integ = MessagingIntegration(
        user_id=user_id,
        credential_id=credential_id,
        name=name,
        phone=phone,
        auto_reply=auto_reply,
    )
    session.add(integ)
    await session.commit()
    return integ
