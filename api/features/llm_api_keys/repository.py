"""Repository for LLM API key lookups."""
from typing import Optional

from sqlalchemy import select

from api.features.llm_api_keys.entities.llm_api_key import LlmApiKey
from api.shared.base import BaseRepository


class LlmApiKeyRepository(BaseRepository[LlmApiKey]):
    """Read access to project credentials."""

    model = LlmApiKey

    async def get_latest_for_project(self, project_id: str) -> Optional[LlmApiKey]:
        """Most recently created credential of a project, if any."""
        stmt = (
            select(LlmApiKey)
            .where(LlmApiKey.project_id == project_id)
            .order_by(LlmApiKey.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
