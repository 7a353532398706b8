from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from avito_relay.models.base import Base, new_id


class UserCredential(Base):
    __tablename__ = "user_credentials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # Bearer token for the Avito messaging API.
    api_key: Mapped[str] = mapped_column(Text, nullable=False)

    # Empty means "use the default API base URL".
    api_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    webhook_secret: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("ix_user_credentials_user_active", "user_id", "is_active"),
    )
