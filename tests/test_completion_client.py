import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from api.shared.exceptions import ExternalServiceError
from infra.llm import completion as completion_module
from infra.llm.completion import LLMCompletionClient, to_langchain_messages
from infra.llm.types import ChatMessage, ChatMessageRole, LLMAdapter, ModelParams


class RecordingChatModel:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.invoked_with = None
        RecordingChatModel.instances.append(self)

    async def ainvoke(self, messages):
        self.invoked_with = messages
        return AIMessage(content="pong")


@pytest.fixture(autouse=True)
def recording_models(monkeypatch):
    RecordingChatModel.instances = []
    monkeypatch.setattr(completion_module, "ChatOpenAI", RecordingChatModel)
    monkeypatch.setattr(completion_module, "AzureChatOpenAI", RecordingChatModel)
    return RecordingChatModel.instances


def _params(adapter=LLMAdapter.OPENAI):
    return ModelParams(provider="openai", adapter=adapter, model="gpt-3.5-turbo")


def test_to_langchain_messages_maps_roles():
    converted = to_langchain_messages(
        [
            ChatMessage(role=ChatMessageRole.SYSTEM, content="be nice"),
            ChatMessage(role=ChatMessageRole.USER, content="hi"),
            ChatMessage(role=ChatMessageRole.ASSISTANT, content="hello"),
        ]
    )

    assert [type(m) for m in converted] == [SystemMessage, HumanMessage, AIMessage]
    assert [m.content for m in converted] == ["be nice", "hi", "hello"]


async def test_complete_openai_passes_credential_and_params(recording_models):
    client = LLMCompletionClient()

    result = await client.complete(
        messages=[ChatMessage(role=ChatMessageRole.USER, content="ping")],
        model_params=_params(),
        api_key="sk-test",
        base_url="https://proxy.example.com/v1",
        extra_headers={"X-Org": "acme"},
        max_retries=1,
    )

    assert result == "pong"
    (model,) = recording_models
    assert model.kwargs["model"] == "gpt-3.5-turbo"
    assert model.kwargs["temperature"] == 0.7
    assert model.kwargs["max_tokens"] == 1000
    assert model.kwargs["api_key"] == "sk-test"
    assert model.kwargs["base_url"] == "https://proxy.example.com/v1"
    assert model.kwargs["default_headers"] == {"X-Org": "acme"}
    assert model.kwargs["max_retries"] == 1
    assert model.kwargs["streaming"] is False
    assert [m.content for m in model.invoked_with] == ["ping"]


async def test_complete_azure_uses_deployment_and_api_version(recording_models):
    client = LLMCompletionClient()

    await client.complete(
        messages=[ChatMessage(role=ChatMessageRole.USER, content="ping")],
        model_params=_params(LLMAdapter.AZURE),
        api_key="azure-key",
        base_url="https://acme.openai.azure.com",
        config={"api_version": "2024-06-01"},
    )

    (model,) = recording_models
    assert model.kwargs["azure_deployment"] == "gpt-3.5-turbo"
    assert model.kwargs["azure_endpoint"] == "https://acme.openai.azure.com"
    assert model.kwargs["api_version"] == "2024-06-01"


async def test_complete_unsupported_adapter_raises(recording_models):
    client = LLMCompletionClient()

    with pytest.raises(ExternalServiceError, match="Unsupported LLM adapter 'anthropic'"):
        await client.complete(
            messages=[ChatMessage(role=ChatMessageRole.USER, content="ping")],
            model_params=_params(LLMAdapter.ANTHROPIC),
            api_key="sk-ant",
        )
    assert recording_models == []


async def test_complete_wraps_provider_errors(monkeypatch):
    class FailingChatModel(RecordingChatModel):
        async def ainvoke(self, messages):
            raise RuntimeError("Incorrect API key provided")

    monkeypatch.setattr(completion_module, "ChatOpenAI", FailingChatModel)
    client = LLMCompletionClient()

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role=ChatMessageRole.USER, content="ping")],
            model_params=_params(),
            api_key="sk-bad",
        )

    assert exc_info.value.message == "openai service error: Incorrect API key provided"
    assert exc_info.value.reason == "Incorrect API key provided"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
