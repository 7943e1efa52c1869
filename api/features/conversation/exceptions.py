"""Exceptions for the Conversation feature."""
from api.shared.exceptions import AppException


class ConversationException(AppException):
    """Base exception for conversation operations."""
    pass


class ConversationNotFoundError(ConversationException):
    """Raised when a conversation does not exist for the caller and project."""

    def __init__(self, conversation_id: str):
        message = "Conversation not found"
        super().__init__(
            message, "CONVERSATION_NOT_FOUND", {"conversation_id": conversation_id}
        )
