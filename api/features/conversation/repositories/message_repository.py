"""Message repository: append and ordered reads."""
from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import aliased

from api.features.conversation.entities.conversation import Message, MessageSender
from api.shared.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for message entities."""

    model = Message

    async def append(
        self, *, conversation_id: str, sender: MessageSender, content: str
    ) -> Message:
        return await self.create(
            Message(conversation_id=conversation_id, sender=sender, content=content)
        )

    async def get_recent(self, conversation_id: str, *, limit: int) -> List[Message]:
        """Up to ``limit`` newest messages, returned in chronological order."""
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def count_by_conversation(self, conversation_ids: List[str]) -> Dict[str, int]:
        if not conversation_ids:
            return {}
        stmt = (
            select(Message.conversation_id, func.count(Message.id))
            .where(Message.conversation_id.in_(conversation_ids))
            .group_by(Message.conversation_id)
        )
        result = await self.session.execute(stmt)
        return {conversation_id: int(total) for conversation_id, total in result.all()}

    async def latest_by_conversation(
        self, conversation_ids: List[str]
    ) -> Dict[str, Message]:
        """Newest message of each given conversation."""
        if not conversation_ids:
            return {}
        ranked = (
            select(
                Message,
                func.row_number()
                .over(
                    partition_by=Message.conversation_id,
                    order_by=Message.created_at.desc(),
                )
                .label("rn"),
            )
            .where(Message.conversation_id.in_(conversation_ids))
            .subquery()
        )
        latest = aliased(Message, ranked)
        stmt = select(latest).where(ranked.c.rn == 1)
        result = await self.session.execute(stmt)
        return {m.conversation_id: m for m in result.scalars().all()}
