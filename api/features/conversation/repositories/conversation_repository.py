"""Conversation repository: ownership-scoped lookups and listings."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from api.features.conversation.entities.conversation import Conversation
from api.shared.base import BaseRepository
from api.shared.entities.base import utcnow
from api.shared.utils import is_valid_uuid


class ConversationRepository(BaseRepository[Conversation]):
    """Repository for conversation entities.

    Every read is filtered on ``(id, project_id, user_id)`` together, so a
    conversation owned by someone else is indistinguishable from a missing one.
    """

    model = Conversation

    async def get_owned(
        self,
        conversation_id: str,
        *,
        project_id: str,
        user_id: str,
        with_messages: bool = False,
    ) -> Optional[Conversation]:
        if not is_valid_uuid(conversation_id):
            return None

        stmt = select(Conversation).where(
            Conversation.id == conversation_id,
            Conversation.project_id == project_id,
            Conversation.user_id == user_id,
        )
        if with_messages:
            stmt = stmt.options(selectinload(Conversation.messages))

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_owned(self, *, project_id: str, user_id: str) -> List[Conversation]:
        """All conversations of a user in a project, most recently updated first."""
        stmt = (
            select(Conversation)
            .where(
                Conversation.project_id == project_id,
                Conversation.user_id == user_id,
            )
            .order_by(Conversation.updated_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def touch(self, conversation: Conversation) -> Conversation:
        """Bump ``updated_at`` to now."""
        conversation.updated_at = utcnow()
        return await self.update(conversation)
