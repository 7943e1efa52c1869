"""LLM API key entity: project-scoped provider credentials."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, Index, JSON, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity, utcnow


class LlmApiKey(BaseEntity):
    """Encrypted credential for one provider connection of a project."""

    __tablename__ = "llm_api_keys"

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
    project_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # Provider selection
    provider: Mapped[str] = mapped_column(String(255), nullable=False)
    adapter: Mapped[str] = mapped_column(String(50), nullable=False)
    base_url: Mapped[Optional[str]] = mapped_column(String(1000))

    # Secrets (AES-GCM encrypted)
    secret_key: Mapped[str] = mapped_column(Text, nullable=False)
    display_secret_key: Mapped[str] = mapped_column(String(255), nullable=False)
    extra_headers: Mapped[Optional[str]] = mapped_column(Text)
    extra_header_keys: Mapped[Optional[List[str]]] = mapped_column(JSON)

    config: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON)

    __table_args__ = (
        Index("ix_llm_api_keys_project_id", "project_id"),
        Index("ix_llm_api_keys_project_provider", "project_id", "provider", unique=True),
    )
