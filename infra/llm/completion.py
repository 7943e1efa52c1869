"""Non-streaming chat completion via LangChain chat models."""
import time
from typing import Any, Dict, List, Optional

import structlog
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from api.shared.exceptions import ExternalServiceError
from infra.llm.types import ChatMessage, ChatMessageRole, LLMAdapter, ModelParams

logger = structlog.get_logger("assistant.llm")

DEFAULT_AZURE_API_VERSION = "2024-02-01"

_MESSAGE_TYPES = {
    ChatMessageRole.SYSTEM: SystemMessage,
    ChatMessageRole.USER: HumanMessage,
    ChatMessageRole.ASSISTANT: AIMessage,
}


def to_langchain_messages(messages: List[ChatMessage]) -> List[BaseMessage]:
    return [_MESSAGE_TYPES[m.role](content=m.content) for m in messages]


class LLMCompletionClient:
    """Builds a chat model per call from a project's credential and invokes it."""

    def build_chat_model(
        self,
        *,
        model_params: ModelParams,
        api_key: str,
        base_url: Optional[str] = None,
        extra_headers: Optional[Dict[str, str]] = None,
        config: Optional[Dict[str, Any]] = None,
        max_retries: int = 1,
    ) -> BaseChatModel:
        config = config or {}
        if model_params.adapter == LLMAdapter.OPENAI:
            return ChatOpenAI(
                model=model_params.model,
                temperature=model_params.temperature,
                max_tokens=model_params.max_tokens,
                api_key=api_key,
                base_url=base_url,
                default_headers=extra_headers,
                max_retries=max_retries,
                streaming=False,
            )
        if model_params.adapter == LLMAdapter.AZURE:
            return AzureChatOpenAI(
                azure_deployment=model_params.model,
                azure_endpoint=base_url,
                api_version=config.get("api_version", DEFAULT_AZURE_API_VERSION),
                temperature=model_params.temperature,
                max_tokens=model_params.max_tokens,
                api_key=api_key,
                default_headers=extra_headers,
                max_retries=max_retries,
                streaming=False,
            )
        raise ExternalServiceError(
            model_params.provider,
            f"Unsupported LLM adapter '{model_params.adapter.value}'",
            {"adapter": model_params.adapter.value},
        )

    async def complete(
        self,
        *,
        messages: List[ChatMessage],
        model_params: ModelParams,
        api_key: str,
        base_url: Optional[str] = None,
        extra_headers: Optional[Dict[str, str]] = None,
        config: Optional[Dict[str, Any]] = None,
        max_retries: int = 1,
    ) -> Any:
        """Return the raw completion content; raises ExternalServiceError on failure."""
        llm = self.build_chat_model(
            model_params=model_params,
            api_key=api_key,
            base_url=base_url,
            extra_headers=extra_headers,
            config=config,
            max_retries=max_retries,
        )

        start_time = time.time()
        try:
            result = await llm.ainvoke(to_langchain_messages(messages))
        except Exception as e:
            logger.error(
                "llm_completion_error",
                provider=model_params.provider,
                model=model_params.model,
                processing_time_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
            raise ExternalServiceError(model_params.provider, str(e)) from e

        logger.info(
            "llm_completion_performance",
            provider=model_params.provider,
            model=model_params.model,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        return result.content
