"""Validated view of a stored LLM API key."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from api.features.llm_api_keys.entities.llm_api_key import LlmApiKey
from api.features.llm_api_keys.exceptions import InvalidCredentialError
from infra.llm.types import LLMAdapter


class LlmApiKeyModel(BaseModel):
    """Domain model for a provider credential; secrets stay encrypted."""

    id: str = Field(description="Credential identifier")
    project_id: str = Field(description="Owning project")
    provider: str = Field(min_length=1, description="Provider display name")
    adapter: LLMAdapter = Field(description="Provider adapter")
    secret_key: str = Field(min_length=1, description="Encrypted secret")
    base_url: Optional[str] = Field(default=None, description="Custom API base URL")
    extra_headers: Optional[str] = Field(default=None, description="Encrypted extra headers")
    extra_header_keys: Optional[List[str]] = Field(default=None)
    config: Optional[Dict[str, Any]] = Field(default=None)

    class Config:
        from_attributes = True

    @field_validator("base_url")
    def empty_base_url_is_unset(cls, v):
        return v or None

    @classmethod
    def from_entity(cls, entity: LlmApiKey) -> "LlmApiKeyModel":
        """Validate a database row; raises InvalidCredentialError."""
        try:
            return cls.model_validate(entity)
        except ValidationError as e:
            raise InvalidCredentialError(
                "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ),
                {"llm_api_key_id": str(getattr(entity, "id", ""))},
            ) from e
