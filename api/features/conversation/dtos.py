"""DTOs for the Conversation feature."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from api.features.conversation.entities.conversation import MessageSender
from api.shared.dtos import BaseDTO


class MessageDTO(BaseDTO):
    """Conversation message DTO."""

    id: str = Field(description="Message identifier")
    conversation_id: str = Field(description="Parent conversation identifier")
    sender: MessageSender = Field(description="Message author: USER or ASSISTANT")
    content: str = Field(description="Message content")
    created_at: datetime = Field(description="Message timestamp")


class ConversationDTO(BaseDTO):
    """Conversation DTO."""

    id: str = Field(description="Conversation identifier")
    project_id: str = Field(description="Owning project")
    user_id: str = Field(description="Owning user")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last exchange timestamp")


class ConversationSummaryDTO(BaseDTO):
    """Conversation list item with message statistics."""

    id: str = Field(description="Conversation identifier")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last exchange timestamp")
    message_count: int = Field(description="Number of messages in the conversation")
    last_message: Optional[MessageDTO] = Field(
        default=None, description="Most recent message"
    )


class ConversationDetailDTO(ConversationDTO):
    """Conversation with its full message history."""

    messages: List[MessageDTO] = Field(description="Messages in chronological order")


class SendMessageRequest(BaseDTO):
    """Send a user message to a conversation."""

    content: str = Field(min_length=1, description="Message content")


class SendMessageResponse(BaseDTO):
    """The stored user message and the assistant's reply."""

    user_message: MessageDTO = Field(description="Persisted user message")
    assistant_message: MessageDTO = Field(description="Persisted assistant reply")
