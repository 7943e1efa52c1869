from uuid import uuid4

from jose import jwt

from tests.conftest import OTHER_USER_ID, PROJECT_ID, auth_headers

BASE_URL = f"/api/v1/projects/{PROJECT_ID}/conversations"


async def _create(client, headers=None):
    response = await client.post(BASE_URL, headers=headers or auth_headers())
    assert response.status_code == 200
    return response.json()["data"]


async def test_health_endpoints(client):
    for path in ("/", "/health", "/ready"):
        response = await client.get(path)
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


async def test_requires_bearer_token(client):
    response = await client.get(BASE_URL)

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_rejects_token_signed_with_other_secret(client):
    token = jwt.encode({"sub": "user-alice"}, "wrong-secret", algorithm="HS256")

    response = await client.get(BASE_URL, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_create_and_list(client):
    created = await _create(client)

    assert created["project_id"] == PROJECT_ID
    assert created["user_id"] == "user-alice"

    response = await client.get(BASE_URL, headers=auth_headers())
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "ok"
    assert [c["id"] for c in body["data"]] == [created["id"]]
    assert body["data"][0]["message_count"] == 0
    assert body["data"][0]["last_message"] is None

    other = await client.get(BASE_URL, headers=auth_headers(OTHER_USER_ID))
    assert other.json()["data"] == []


async def test_get_missing_conversation_returns_404(client):
    response = await client.get(f"{BASE_URL}/{uuid4()}", headers=auth_headers())

    assert response.status_code == 404
    assert "Conversation not found" in response.json()["detail"]


async def test_get_foreign_conversation_returns_404(client):
    created = await _create(client)

    response = await client.get(
        f"{BASE_URL}/{created['id']}", headers=auth_headers(OTHER_USER_ID)
    )

    assert response.status_code == 404


async def test_send_empty_content_returns_422(client):
    created = await _create(client)

    response = await client.post(
        f"{BASE_URL}/{created['id']}/messages",
        json={"content": ""},
        headers=auth_headers(),
    )

    assert response.status_code == 422


async def test_send_to_missing_conversation_returns_404(client):
    response = await client.post(
        f"{BASE_URL}/{uuid4()}/messages",
        json={"content": "Hello"},
        headers=auth_headers(),
    )

    assert response.status_code == 404


async def test_hello_scenario(client, completion_client):
    created = await _create(client)

    response = await client.post(
        f"{BASE_URL}/{created['id']}/messages",
        json={"content": "Hello"},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user_message"]["sender"] == "USER"
    assert data["user_message"]["content"] == "Hello"
    assert data["assistant_message"]["sender"] == "ASSISTANT"
    assert data["assistant_message"]["content"].startswith(
        'Hello! I received your message: "Hello".'
    )
    assert completion_client.calls == []

    listing = (await client.get(BASE_URL, headers=auth_headers())).json()["data"]
    assert listing[0]["message_count"] == 2
    assert listing[0]["last_message"]["sender"] == "ASSISTANT"

    detail = await client.get(f"{BASE_URL}/{created['id']}", headers=auth_headers())
    messages = detail.json()["data"]["messages"]
    assert [m["sender"] for m in messages] == ["USER", "ASSISTANT"]


async def test_send_with_provider_error_still_succeeds(
    client, completion_client, add_llm_api_key
):
    await add_llm_api_key()
    completion_client.error = RuntimeError("connection reset")
    created = await _create(client)

    response = await client.post(
        f"{BASE_URL}/{created['id']}/messages",
        json={"content": "Hello"},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    reply = response.json()["data"]["assistant_message"]["content"]
    assert "I'm sorry, but I encountered an error" in reply
    assert "connection reset" in reply
