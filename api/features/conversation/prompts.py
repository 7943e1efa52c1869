"""Fixed texts used when building and substituting assistant replies."""
from typing import List

from api.features.conversation.entities.conversation import Message, MessageSender
from api.shared.exceptions import ExternalServiceError
from infra.llm.types import ChatMessage, ChatMessageRole

SYSTEM_PROMPT = (
    "You are a helpful AI assistant integrated into Langfuse. "
    "Provide clear, helpful responses to user questions. "
    "Keep your responses concise and relevant."
)

ONBOARDING_TEMPLATE = """Hello! I received your message: "{content}".

To enable AI-powered responses:

🔑 **Step 1: Add LLM API Key**
1. Go to ⚙️ Settings → "LLM Connections"
2. Click "Add New API Key"
3. Choose your provider:
   • **OpenAI**: Get key from https://platform.openai.com/api-keys
   • **Google AI**: Get key from https://aistudio.google.com/app/apikey

🤖 **Step 2: Configure Model**
• Select your preferred model (e.g., gpt-3.5-turbo, gemini-pro)
• Save the configuration

Once configured, I'll provide intelligent AI responses to all your questions!"""

ERROR_TEMPLATE = """I'm sorry, but I encountered an error while processing your request. The error was: {error}

Please check your LLM API configuration in ⚙️ Settings → "LLM Connections" and try again."""

NON_TEXT_COMPLETION_REPLY = (
    "I apologize, but I couldn't generate a proper response. Please try again."
)


def build_onboarding_reply(content: str) -> str:
    # content may contain braces
    return ONBOARDING_TEMPLATE.replace("{content}", content)


def build_error_reply(error: Exception) -> str:
    # provider failures carry the provider's own message
    reason = error.reason if isinstance(error, ExternalServiceError) else str(error)
    return ERROR_TEMPLATE.replace("{error}", reason or "Unknown error")


def build_chat_messages(history: List[Message], content: str) -> List[ChatMessage]:
    """System instruction, then prior turns, then the new user message."""
    messages = [ChatMessage(role=ChatMessageRole.SYSTEM, content=SYSTEM_PROMPT)]
    for msg in history:
        role = (
            ChatMessageRole.USER
            if msg.sender == MessageSender.USER
            else ChatMessageRole.ASSISTANT
        )
        messages.append(ChatMessage(role=role, content=msg.content))
    messages.append(ChatMessage(role=ChatMessageRole.USER, content=content))
    return messages
