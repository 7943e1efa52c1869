"""Add llm_api_keys, conversation and message tables

Revision ID: 20261018_add_assistant_tables
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_add_assistant_tables"
down_revision = None
branch_labels = None
depends_on = None

message_sender = postgresql.ENUM("USER", "ASSISTANT", name="messagesender", create_type=False)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _has_table(name: str) -> bool:
    return sa.inspect(op.get_bind()).has_table(name)


def _owner_foreign_key(table: str, column: str, referent: str) -> None:
    # users/projects belong to the host application; link only when present
    if _has_table(referent):
        op.create_foreign_key(
            f"fk_{table}_{column}",
            table,
            referent,
            [column],
            ["id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
        )


def _create_llm_api_keys() -> None:
    op.create_table(
        "llm_api_keys",
        _uuid_pk(),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("project_id", sa.String(255), nullable=False),
        sa.Column("provider", sa.String(255), nullable=False),
        sa.Column("adapter", sa.String(50), nullable=False),
        sa.Column("base_url", sa.String(1000), nullable=True),
        sa.Column("secret_key", sa.Text, nullable=False),
        sa.Column("display_secret_key", sa.String(255), nullable=False),
        sa.Column("extra_headers", sa.Text, nullable=True),
        sa.Column("extra_header_keys", sa.JSON, nullable=True),
        sa.Column("config", sa.JSON, nullable=True),
    )
    op.create_index("ix_llm_api_keys_project_id", "llm_api_keys", ["project_id"])
    op.create_index(
        "ix_llm_api_keys_project_provider",
        "llm_api_keys",
        ["project_id", "provider"],
        unique=True,
    )


def upgrade() -> None:
    # Provider credentials are managed by the host application when it has them
    if not _has_table("llm_api_keys"):
        _create_llm_api_keys()

    # Conversations
    op.create_table(
        "conversation",
        _uuid_pk(),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("project_id", sa.String(255), nullable=False),
    )
    op.create_index("ix_conversation_user_id", "conversation", ["user_id"])
    op.create_index("ix_conversation_project_id", "conversation", ["project_id"])
    _owner_foreign_key("conversation", "user_id", "users")
    _owner_foreign_key("conversation", "project_id", "projects")

    # Messages
    message_sender.create(op.get_bind(), checkfirst=True)
    op.create_table(
        "message",
        _uuid_pk(),
        _timestamp("created_at"),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender", message_sender, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
    )
    op.create_foreign_key(
        "fk_message_conversation_id",
        "message",
        "conversation",
        ["conversation_id"],
        ["id"],
        ondelete="CASCADE",
    )
    op.create_index("ix_message_conversation_id", "message", ["conversation_id"])
    op.create_index("ix_message_created_at", "message", ["created_at"])


def downgrade() -> None:
    # llm_api_keys may predate this revision, so it is left in place
    op.drop_index("ix_message_created_at", table_name="message")
    op.drop_index("ix_message_conversation_id", table_name="message")
    op.drop_table("message")
    message_sender.drop(op.get_bind(), checkfirst=True)

    op.drop_index("ix_conversation_project_id", table_name="conversation")
    op.drop_index("ix_conversation_user_id", table_name="conversation")
    op.drop_table("conversation")
