"""Provider-agnostic chat completion types."""
from enum import Enum

from pydantic import BaseModel, Field


class LLMAdapter(str, Enum):
    """Wire protocol used to reach a provider."""

    OPENAI = "openai"
    AZURE = "azure"
    ANTHROPIC = "anthropic"
    BEDROCK = "bedrock"
    VERTEX_AI = "google-vertex-ai"
    GOOGLE_AI_STUDIO = "google-ai-studio"


class ChatMessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single turn sent to the completion provider."""

    role: ChatMessageRole = Field(description="Turn role")
    content: str = Field(description="Turn text")


class ModelParams(BaseModel):
    """Model selection and sampling parameters for one completion call."""

    provider: str = Field(description="Provider display name")
    adapter: LLMAdapter = Field(description="Provider adapter")
    model: str = Field(description="Model identifier")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, ge=1)
