"""
Pytest configuration and fixtures for testing
"""
import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI

from config.settings import Settings
from api.application import create_app
from services.message_store import InMemoryMessageStore
from services.presence_tracker import PresenceTracker
from services.broadcast_hub import InProcessBroadcastHub
from services.chat_gateway import ChatGateway


@pytest.fixture
def settings() -> Settings:
    """Settings that never touch the environment or a .env file"""
    return Settings(
        _env_file=None,
        MONGO_URI="mongodb://localhost:27017",
        CLIENT_URI="http://localhost:5173",
    )


@pytest.fixture
def message_store() -> InMemoryMessageStore:
    """Empty in-memory message store"""
    return InMemoryMessageStore()


@pytest.fixture
def presence_tracker() -> PresenceTracker:
    return PresenceTracker()


@pytest.fixture
def hub() -> InProcessBroadcastHub:
    """In-process hub; tests attach one queue per simulated connection"""
    return InProcessBroadcastHub()


@pytest.fixture
def gateway(message_store, presence_tracker, hub) -> ChatGateway:
    return ChatGateway(store=message_store, presence=presence_tracker, hub=hub)


@pytest.fixture
def app(settings, message_store, hub) -> FastAPI:
    """FastAPI app wired to the in-memory store and in-process hub"""
    return create_app(settings, message_store=message_store, hub=hub)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process (catch-all 500s are returned, not raised)"""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
