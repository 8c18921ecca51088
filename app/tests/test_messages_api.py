"""
Tests for the HTTP API

Tests cover:
- GET/POST /api/messages
- Status codes for validation and store failures
- Root and health endpoints
"""
import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient
from exceptions.domain_exceptions import StoreUnavailableException


@pytest.mark.asyncio
class TestMessagesAPI:
    """Test suite for /api/messages"""

    async def test_list_empty(self, client: AsyncClient):
        response = await client.get("/api/messages")

        assert response.status_code == 200
        assert response.json() == []

    async def test_post_message_created(self, client: AsyncClient, hub):
        """Test POST returns 201 and broadcasts new-message to every socket"""
        hub.attach("sid-alice")
        hub.attach("sid-bob")

        response = await client.post("/api/messages", json={"username": "alice", "content": "hi"})

        assert response.status_code == 201
        body = response.json()
        assert body["delivered"] is True
        assert body["username"] == "alice"
        assert body["content"] == "hi"
        assert body["seenBy"] == []
        assert body["_id"]
        assert "timestamp" in body

        for sid in ["sid-alice", "sid-bob"]:
            events = hub.drain(sid)
            assert len(events) == 1
            assert events[0][0] == "new-message"
            assert events[0][1]["content"] == "hi"
            assert events[0][1]["_id"] == body["_id"]

    async def test_post_then_list(self, client: AsyncClient):
        await client.post("/api/messages", json={"username": "alice", "content": "first"})
        await client.post("/api/messages", json={"username": "bob", "content": "second"})

        response = await client.get("/api/messages")

        assert response.status_code == 200
        messages = response.json()
        assert [m["content"] for m in messages] == ["first", "second"]
        assert messages[0]["timestamp"] <= messages[1]["timestamp"]

    @pytest.mark.parametrize("body", [
        {"content": "hi"},
        {"username": "alice"},
        {"username": "", "content": "hi"},
        {"username": "alice", "content": "   "},
        {},
    ])
    async def test_post_validation_error(self, client: AsyncClient, hub, body):
        hub.attach("sid-alice")

        response = await client.post("/api/messages", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationException"
        assert hub.drain("sid-alice") == []

    async def test_post_malformed_json(self, client: AsyncClient):
        response = await client.post(
            "/api/messages",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

    async def test_post_store_unavailable(self, client: AsyncClient, message_store, hub):
        hub.attach("sid-alice")
        message_store.create_message = AsyncMock(
            side_effect=StoreUnavailableException("Failed to save message")
        )

        response = await client.post("/api/messages", json={"username": "alice", "content": "hi"})

        assert response.status_code == 500
        assert response.json()["error"] == "StoreUnavailableException"
        assert hub.drain("sid-alice") == []

    async def test_unexpected_error_is_generic_500(self, client: AsyncClient, message_store):
        """Test internals never leak through the catch-all handler"""
        message_store.list_messages = AsyncMock(side_effect=RuntimeError("secret connection string"))

        response = await client.get("/api/messages")

        assert response.status_code == 500
        assert response.json() == {"error": "InternalServerError", "message": "Internal server error"}
        assert "secret" not in response.text


@pytest.mark.asyncio
class TestDefaultRoutes:
    """Test suite for root and health endpoints"""

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "server running..."
        assert "requestip" in body

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_cors_allows_client_uri(self, client: AsyncClient, settings):
        response = await client.get("/api/messages", headers={"Origin": settings.CLIENT_URI})

        assert response.headers["access-control-allow-origin"] == settings.CLIENT_URI

    async def test_cors_rejects_other_origin(self, client: AsyncClient):
        response = await client.get("/api/messages", headers={"Origin": "http://evil.example"})

        assert "access-control-allow-origin" not in response.headers
