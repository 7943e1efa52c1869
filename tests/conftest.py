from typing import Any, Dict, List, Optional

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient
from jose import jwt

from api.features.conversation.service import ConversationService
from api.features.llm_api_keys.entities.llm_api_key import LlmApiKey
from api.shared.entities.registry import BaseEntity
from core.settings import SETTINGS
from infra.encryption import SecretCipher
from infra.resources import DatabaseResource

TEST_ENCRYPTION_KEY = "7f3a9c1e5b2d8f4a6c0e9b7d3f1a5c8e2b4d6f8a0c2e4b6d8f0a2c4e6b8d0f2a"
PROJECT_ID = "project-alpha"
OTHER_PROJECT_ID = "project-beta"
USER_ID = "user-alice"
OTHER_USER_ID = "user-bob"


class FakeCompletionClient:
    """Records completion calls and returns a canned result or raises."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.result: Any = "Sure, happy to help."
        self.error: Optional[Exception] = None

    async def complete(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def auth_headers(user_id: str = USER_ID) -> Dict[str, str]:
    token = jwt.encode(
        {"sub": user_id, "email": f"{user_id}@example.com"},
        SETTINGS.AUTH.JWT_SECRET.get_secret_value(),
        algorithm=SETTINGS.AUTH.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def db_resource(tmp_path):
    db = DatabaseResource(f"sqlite+aiosqlite:///{tmp_path / 'assistant.db'}")
    await db.init()
    async with db.engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)
    yield db
    await db.shutdown()


@pytest.fixture
async def db_session(db_resource):
    session = db_resource.get_session()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def cipher():
    return SecretCipher(TEST_ENCRYPTION_KEY)


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def conversation_service(completion_client, cipher):
    return ConversationService(completion_client=completion_client, cipher=cipher)


@pytest.fixture
def add_llm_api_key(db_session, cipher):
    async def _add(project_id: str = PROJECT_ID, **overrides) -> LlmApiKey:
        fields = {
            "project_id": project_id,
            "provider": "openai",
            "adapter": "openai",
            "secret_key": cipher.encrypt("sk-test-123"),
            "display_secret_key": "...123",
        }
        fields.update(overrides)
        entity = LlmApiKey(**fields)
        db_session.add(entity)
        await db_session.commit()
        return entity

    return _add


@pytest.fixture
async def client(db_resource, cipher, completion_client):
    from api.main import app

    infrastructure = app.container.infrastructure
    infrastructure.database.override(providers.Object(db_resource))
    infrastructure.cipher.override(providers.Object(cipher))
    infrastructure.completion_client.override(providers.Object(completion_client))
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        infrastructure.database.reset_override()
        infrastructure.cipher.reset_override()
        infrastructure.completion_client.reset_override()
