"""Conversation and message entities."""
from datetime import datetime
from enum import Enum
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.shared.entities.base import BaseEntity, utcnow


class MessageSender(str, Enum):
    """Author of a message."""

    USER = "USER"
    ASSISTANT = "ASSISTANT"


class Conversation(BaseEntity):
    """A thread of messages owned by one user within one project."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )

    # Owners live in the host application's schema
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    project_id: Mapped[str] = mapped_column(String(255), nullable=False)

    messages: Mapped[List["Message"]] = relationship(
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Message.created_at",
    )

    __table_args__ = (
        Index("ix_conversation_user_id", "user_id"),
        Index("ix_conversation_project_id", "project_id"),
    )


class Message(BaseEntity):
    """One append-only turn of a conversation."""

    conversation_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("conversation.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender: Mapped[MessageSender] = mapped_column(SQLEnum(MessageSender), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    conversation: Mapped[Conversation] = relationship(back_populates="messages")

    __table_args__ = (
        Index("ix_message_conversation_id", "conversation_id"),
        Index("ix_message_created_at", "created_at"),
    )
