"""user credentials, integrations and outgoing messages

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_credentials",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("api_key", sa.Text(), nullable=False),
        sa.Column("api_url", sa.String(length=2048), nullable=True),
        sa.Column("webhook_secret", sa.String(length=255), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_user_credentials_user_id", "user_credentials", ["user_id"])
    op.create_index(
        "ix_user_credentials_user_active", "user_credentials", ["user_id", "is_active"]
    )

    op.create_table(
        "messaging_integrations",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column(
            "credential_id",
            sa.String(length=36),
            sa.ForeignKey("user_credentials.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column(
            "status", sa.String(length=32), nullable=False, server_default="active"
        ),
        sa.Column(
            "auto_reply", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "messages_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_messaging_integrations_user_id", "messaging_integrations", ["user_id"]
    )
    op.create_index(
        "ix_messaging_integrations_credential_id",
        "messaging_integrations",
        ["credential_id"],
    )

    op.create_table(
        "outgoing_messages",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "integration_id",
            sa.String(length=36),
            sa.ForeignKey("messaging_integrations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("chat_id", sa.String(length=255), nullable=False),
        sa.Column("message_text", sa.Text(), nullable=False),
        sa.Column(
            "is_incoming", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_outgoing_messages_integration_id", "outgoing_messages", ["integration_id"]
    )
    op.create_index(
        "ix_outgoing_messages_integration_ts",
        "outgoing_messages",
        ["integration_id", "timestamp"],
    )


def downgrade() -> None:
    op.drop_index("ix_outgoing_messages_integration_ts", table_name="outgoing_messages")
    op.drop_index("ix_outgoing_messages_integration_id", table_name="outgoing_messages")
    op.drop_table("outgoing_messages")
    op.drop_index(
        "ix_messaging_integrations_credential_id", table_name="messaging_integrations"
    )
    op.drop_index(
        "ix_messaging_integrations_user_id", table_name="messaging_integrations"
    )
    op.drop_table("messaging_integrations")
    op.drop_index("ix_user_credentials_user_active", table_name="user_credentials")
    op.drop_index("ix_user_credentials_user_id", table_name="user_credentials")
    op.drop_table("user_credentials")
