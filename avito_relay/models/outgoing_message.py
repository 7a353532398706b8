from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from avito_relay.models.base import Base, new_id


class OutgoingMessage(Base):
    """Audit copy of a message sent through the relay. Write-only."""

    __tablename__ = "outgoing_messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    integration_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("messaging_integrations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    chat_id: Mapped[str] = mapped_column(String(255), nullable=False)

    message_text: Mapped[str] = mapped_column(Text, nullable=False)

    is_incoming: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    timestamp: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_outgoing_messages_integration_ts", "integration_id", "timestamp"),
    )
