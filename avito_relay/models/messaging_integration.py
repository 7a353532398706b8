from __future__ import annotations

import datetime as dt

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from avito_relay.models.base import Base, new_id
from avito_relay.models.user_credential import UserCredential


class MessagingIntegration(Base):
    __tablename__ = "messaging_integrations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    credential_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user_credentials.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # active | inactive | error
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="active", server_default="active"
    )

    auto_reply: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    messages_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Inner join: an integration without a credential record loads as no row.
    credential: Mapped[UserCredential] = relationship(
        UserCredential, lazy="joined", innerjoin=True
    )
