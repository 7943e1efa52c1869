"""Controller for the Conversation feature."""
import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.conversation.dtos import (
    ConversationDTO,
    ConversationDetailDTO,
    ConversationSummaryDTO,
    MessageDTO,
    SendMessageRequest,
    SendMessageResponse,
)
from api.features.conversation.exceptions import ConversationNotFoundError
from api.features.conversation.service import ConversationService

logger = logging.getLogger("assistant.conversation.controller")


class ConversationController:
    """Controller handling conversation CRUD and message exchange."""

    def __init__(self, conversation_service: ConversationService):
        self.conversation_service = conversation_service

    async def list_conversations(
        self,
        *,
        project_id: str,
        user_id: str,
        db_session: AsyncSession,
    ) -> List[ConversationSummaryDTO]:
        try:
            summaries = await self.conversation_service.list_conversations(
                project_id=project_id, user_id=user_id, db_session=db_session
            )
        except Exception:
            logger.exception("Unexpected error listing conversations")
            raise HTTPException(status_code=500, detail="Internal server error")

        return [
            ConversationSummaryDTO(
                id=s.conversation.id,
                created_at=s.conversation.created_at,
                updated_at=s.conversation.updated_at,
                message_count=s.message_count,
                last_message=(
                    MessageDTO.model_validate(s.last_message)
                    if s.last_message is not None
                    else None
                ),
            )
            for s in summaries
        ]

    async def get_conversation(
        self,
        *,
        project_id: str,
        conversation_id: str,
        user_id: str,
        db_session: AsyncSession,
    ) -> ConversationDetailDTO:
        try:
            conversation = await self.conversation_service.get_conversation(
                project_id=project_id,
                conversation_id=conversation_id,
                user_id=user_id,
                db_session=db_session,
            )
        except ConversationNotFoundError as e:
            logger.warning(f"Conversation not found: {conversation_id}")
            raise HTTPException(status_code=404, detail=e.message)
        except Exception:
            logger.exception("Unexpected error fetching conversation")
            raise HTTPException(status_code=500, detail="Internal server error")

        return ConversationDetailDTO.model_validate(conversation)

    async def create_conversation(
        self,
        *,
        project_id: str,
        user_id: str,
        db_session: AsyncSession,
    ) -> ConversationDTO:
        try:
            conversation = await self.conversation_service.create_conversation(
                project_id=project_id, user_id=user_id, db_session=db_session
            )
        except Exception:
            logger.exception("Unexpected error creating conversation")
            raise HTTPException(status_code=500, detail="Failed to create conversation")

        return ConversationDTO.model_validate(conversation)

    async def send_message(
        self,
        *,
        project_id: str,
        conversation_id: str,
        user_id: str,
        request: SendMessageRequest,
        db_session: AsyncSession,
    ) -> SendMessageResponse:
        try:
            user_message, assistant_message = await self.conversation_service.send_message(
                project_id=project_id,
                conversation_id=conversation_id,
                user_id=user_id,
                content=request.content,
                db_session=db_session,
            )
        except ConversationNotFoundError as e:
            logger.warning(f"Conversation not found for message: {conversation_id}")
            raise HTTPException(status_code=404, detail=e.message)
        except Exception:
            logger.exception("Unexpected error sending message")
            raise HTTPException(status_code=500, detail="Internal server error")

        return SendMessageResponse(
            user_message=MessageDTO.model_validate(user_message),
            assistant_message=MessageDTO.model_validate(assistant_message),
        )
