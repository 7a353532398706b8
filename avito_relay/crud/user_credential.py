from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from avito_relay.models.user_credential import UserCredential


async def get_active_credential_for_user(
    *, session: AsyncSession, user_id: str
) -> UserCredential:
    """Exactly one active record.

    Raises NoResultFound for zero rows and MultipleResultsFound for more.
    """
    res = await session.execute(
        select(UserCredential)
        .where(UserCredential.user_id == user_id)
        .where(UserCredential.is_active.is_(True))
    )
    return res.scalar_one()


async def create_credential(
    *,
    session: AsyncSession,
    user_id: str,
    api_key: str,
    api_url: str | None,
    webhook_secret: str | None = None,
) -> UserCredential:
    # Keep at most one active record per user.
    await session.execute(
        update(UserCredential)
        .where(UserCredential.user_id == user_id)
        .where(UserCredential.is_active.is_(True))
        .values(is_active=False)
    )
    cred = UserCredential(
        user_id=user_id,
        api_key=api_key,
        api_url=api_url,
        webhook_secret=webhook_secret,
        is_active=True,
    )
    session.add(cred)
    await session.commit()
    await session.refresh(cred)
    return cred
