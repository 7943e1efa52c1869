"""Service layer for the Conversation feature.

Sending a message is a linear sequence of individually committed writes:
user message, assistant reply, then the conversation timestamp. A failure
between steps can leave a user message without a reply.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.conversation.entities.conversation import (
    Conversation,
    Message,
    MessageSender,
)
from api.features.conversation.exceptions import ConversationNotFoundError
from api.features.conversation.prompts import (
    NON_TEXT_COMPLETION_REPLY,
    build_chat_messages,
    build_error_reply,
    build_onboarding_reply,
)
from api.features.conversation.repositories.conversation_repository import (
    ConversationRepository,
)
from api.features.conversation.repositories.message_repository import MessageRepository
from api.features.llm_api_keys.models import LlmApiKeyModel
from api.features.llm_api_keys.repository import LlmApiKeyRepository
from api.shared.utils import truncate_text
from core.settings import SETTINGS
from infra.encryption import SecretCipher
from infra.llm.completion import LLMCompletionClient
from infra.llm.types import ModelParams

logger = structlog.get_logger("assistant.conversation.service")


@dataclass
class ConversationSummary:
    conversation: Conversation
    message_count: int
    last_message: Optional[Message]


class ConversationService:
    """Conversation CRUD plus assistant reply generation."""

    def __init__(self, completion_client: LLMCompletionClient, cipher: SecretCipher):
        self.completion_client = completion_client
        self.cipher = cipher

    async def list_conversations(
        self, *, project_id: str, user_id: str, db_session: AsyncSession
    ) -> List[ConversationSummary]:
        conversations = await ConversationRepository(db_session).list_owned(
            project_id=project_id, user_id=user_id
        )
        ids = [c.id for c in conversations]
        messages = MessageRepository(db_session)
        counts = await messages.count_by_conversation(ids)
        latest = await messages.latest_by_conversation(ids)
        return [
            ConversationSummary(
                conversation=c,
                message_count=counts.get(c.id, 0),
                last_message=latest.get(c.id),
            )
            for c in conversations
        ]

    async def get_conversation(
        self,
        *,
        project_id: str,
        conversation_id: str,
        user_id: str,
        db_session: AsyncSession,
        with_messages: bool = True,
    ) -> Conversation:
        """Fetch an owned conversation; raises ConversationNotFoundError."""
        conversation = await ConversationRepository(db_session).get_owned(
            conversation_id,
            project_id=project_id,
            user_id=user_id,
            with_messages=with_messages,
        )
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    async def create_conversation(
        self, *, project_id: str, user_id: str, db_session: AsyncSession
    ) -> Conversation:
        conversation = await ConversationRepository(db_session).create(
            Conversation(project_id=project_id, user_id=user_id)
        )
        await db_session.commit()
        logger.info(
            "conversation_created",
            conversation_id=conversation.id,
            project_id=project_id,
        )
        return conversation

    async def send_message(
        self,
        *,
        project_id: str,
        conversation_id: str,
        user_id: str,
        content: str,
        db_session: AsyncSession,
    ) -> Tuple[Message, Message]:
        """Store a user message and the assistant's reply to it.

        Provider problems never raise here; they become the reply text.
        """
        conversation = await self.get_conversation(
            project_id=project_id,
            conversation_id=conversation_id,
            user_id=user_id,
            db_session=db_session,
            with_messages=False,
        )
        conversations = ConversationRepository(db_session)
        messages = MessageRepository(db_session)

        user_message = await messages.append(
            conversation_id=conversation.id, sender=MessageSender.USER, content=content
        )
        await db_session.commit()

        history = await messages.get_recent(
            conversation.id, limit=SETTINGS.ASSISTANT.HISTORY_LIMIT
        )

        reply = await self.generate_reply(
            project_id=project_id,
            content=content,
            history=history,
            db_session=db_session,
        )

        assistant_message = await messages.append(
            conversation_id=conversation.id,
            sender=MessageSender.ASSISTANT,
            content=reply,
        )
        await db_session.commit()

        await conversations.touch(conversation)
        await db_session.commit()

        logger.info(
            "message_exchange_completed",
            conversation_id=conversation.id,
            project_id=project_id,
            content_preview=truncate_text(content, 80),
        )
        return user_message, assistant_message

    async def generate_reply(
        self,
        *,
        project_id: str,
        content: str,
        history: List[Message],
        db_session: AsyncSession,
    ) -> str:
        """Reply text for ``content``: onboarding, provider output, or an error note."""
        credential = await LlmApiKeyRepository(db_session).get_latest_for_project(
            project_id
        )
        if credential is None:
            logger.info("llm_api_key_missing", project_id=project_id)
            return build_onboarding_reply(content)

        try:
            api_key = LlmApiKeyModel.from_entity(credential)
            completion = await self.completion_client.complete(
                messages=build_chat_messages(history, content),
                model_params=ModelParams(
                    provider=api_key.provider,
                    adapter=api_key.adapter,
                    model=SETTINGS.ASSISTANT.DEFAULT_MODEL,
                    temperature=SETTINGS.ASSISTANT.TEMPERATURE,
                    max_tokens=SETTINGS.ASSISTANT.MAX_TOKENS,
                ),
                api_key=self.cipher.decrypt(api_key.secret_key),
                base_url=api_key.base_url,
                extra_headers=self.cipher.decrypt_extra_headers(api_key.extra_headers),
                config=api_key.config,
                max_retries=SETTINGS.ASSISTANT.MAX_RETRIES,
            )
        except Exception as e:
            logger.error(
                "assistant_reply_failed",
                project_id=project_id,
                llm_api_key_id=credential.id,
                error=str(e),
            )
            return build_error_reply(e)

        if isinstance(completion, str):
            return completion
        logger.warning(
            "assistant_reply_not_text",
            project_id=project_id,
            completion_type=type(completion).__name__,
        )
        return NON_TEXT_COMPLETION_REPLY
