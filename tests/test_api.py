import pytest

from chat_backend.app.api.deps import get_chat_service
from chat_backend.app.core.errors import StorageError
from chat_backend.app.repositories.base import ChatRepository
from chat_backend.app.repositories.memory import InMemoryMessageRepository, InMemoryStore
from chat_backend.app.services.chat_service import ChatService


class BrokenChatRepository(ChatRepository):
    def create(self, chat):
        raise StorageError("failed to create chat")

    def delete(self, chat_id):
        raise StorageError("failed to delete chat")

    def exists(self, chat_id):
        raise StorageError("failed to check chat existence")

    def get_by_id(self, chat_id):
        raise StorageError("failed to load chat")


def _create_chat(client, title="Тестовый чат"):
    response = client.post("/api/chats", json={"title": title})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_create_chat(client):
    body = _create_chat(client, "  Чат с пробелами  ")

    assert body["title"] == "Чат с пробелами"
    assert isinstance(body["id"], int)
    assert body["created_at"].endswith("Z")


def test_create_chat_empty_title(client):
    response = client.post("/api/chats", json={"title": "   "})
    assert response.status_code == 400
    assert response.json() == {"detail": "title cannot be empty"}


def test_create_chat_missing_title(client):
    response = client.post("/api/chats", json={})
    assert response.status_code == 400
    assert response.json() == {"detail": "title cannot be empty"}


def test_create_chat_long_title(client):
    response = client.post("/api/chats", json={"title": "t" * 201})
    assert response.status_code == 400
    assert response.json() == {"detail": "title must be 1-200 characters"}


def test_create_chat_invalid_json(client):
    response = client.post(
        "/api/chats",
        content="{invalid}",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid JSON"}


def test_get_chat_with_messages(client):
    chat = _create_chat(client)
    for i in range(5):
        response = client.post(f"/api/chats/{chat['id']}/messages", json={"text": f"msg {i}"})
        assert response.status_code == 201

    response = client.get(f"/api/chats/{chat['id']}", params={"limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["chat"] == chat
    assert [m["text"] for m in body["messages"]] == ["msg 4", "msg 3"]


def test_get_chat_limit_defaults_and_clamps(client):
    chat = _create_chat(client)
    for i in range(25):
        client.post(f"/api/chats/{chat['id']}/messages", json={"text": f"msg {i}"})

    default = client.get(f"/api/chats/{chat['id']}").json()
    garbage = client.get(f"/api/chats/{chat['id']}?limit=abc").json()
    zero = client.get(f"/api/chats/{chat['id']}?limit=0").json()
    large = client.get(f"/api/chats/{chat['id']}?limit=150").json()

    assert len(default["messages"]) == 20
    assert len(garbage["messages"]) == 20
    assert len(zero["messages"]) == 20
    assert len(large["messages"]) == 25


def test_get_missing_chat(client):
    response = client.get("/api/chats/999", params={"limit": 20})
    assert response.status_code == 404
    assert response.json() == {"detail": "chat not found"}


def test_invalid_chat_id(client):
    response = client.get("/api/chats/abc")
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid chat ID"}

    response = client.delete("/api/chats/abc")
    assert response.status_code == 400


def test_delete_chat(client):
    chat = _create_chat(client)
    client.post(f"/api/chats/{chat['id']}/messages", json={"text": "bye"})

    response = client.delete(f"/api/chats/{chat['id']}")
    assert response.status_code == 204

    assert client.get(f"/api/chats/{chat['id']}").status_code == 404
    response = client.delete(f"/api/chats/{chat['id']}")
    assert response.status_code == 404
    assert response.json() == {"detail": "chat not found"}


def test_create_message(client):
    chat = _create_chat(client)

    response = client.post(f"/api/chats/{chat['id']}/messages", json={"text": "  Привет  "})

    assert response.status_code == 201
    body = response.json()
    assert body["text"] == "Привет"
    assert body["chat_id"] == chat["id"]


def test_create_message_empty_text(client):
    chat = _create_chat(client)

    response = client.post(f"/api/chats/{chat['id']}/messages", json={"text": ""})

    assert response.status_code == 400
    assert response.json() == {"detail": "text cannot be empty"}


def test_create_message_missing_chat(client):
    response = client.post("/api/chats/999/messages", json={"text": ""})
    assert response.status_code == 404
    assert response.json() == {"detail": "chat not found"}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


HUGE_ID = "99999999999999999999999"


def test_out_of_range_chat_id(client):
    for response in (
        client.get(f"/api/chats/{HUGE_ID}"),
        client.delete(f"/api/chats/{HUGE_ID}"),
        client.post(f"/api/chats/{HUGE_ID}/messages", json={"text": "x"}),
    ):
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid chat ID"}


@pytest.mark.parametrize("raw", ["1_0", " 5", "5.0", "99999999999999999999999"])
def test_get_chat_malformed_limit_uses_default(client, raw):
    chat = _create_chat(client)
    for i in range(25):
        client.post(f"/api/chats/{chat['id']}/messages", json={"text": f"msg {i}"})

    response = client.get(f"/api/chats/{chat['id']}", params={"limit": raw})

    assert response.status_code == 200
    assert len(response.json()["messages"]) == 20


def test_null_title_and_text_are_empty(client):
    response = client.post("/api/chats", json={"title": None})
    assert response.status_code == 400
    assert response.json() == {"detail": "title cannot be empty"}

    chat = _create_chat(client)
    response = client.post(f"/api/chats/{chat['id']}/messages", json={"text": None})
    assert response.status_code == 400
    assert response.json() == {"detail": "text cannot be empty"}


def test_storage_error_maps_to_500(client):
    def broken_service():
        return ChatService(BrokenChatRepository(), InMemoryMessageRepository(InMemoryStore()))

    client.app.dependency_overrides[get_chat_service] = broken_service
    try:
        for response in (
            client.post("/api/chats", json={"title": "t"}),
            client.get("/api/chats/1"),
            client.delete("/api/chats/1"),
            client.post("/api/chats/1/messages", json={"text": "x"}),
        ):
            assert response.status_code == 500
            assert response.json() == {"detail": "internal storage error"}
    finally:
        client.app.dependency_overrides.clear()
