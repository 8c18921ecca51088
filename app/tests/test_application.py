"""
Tests for application startup and shutdown
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from pymongo import ASCENDING
from pymongo.errors import ServerSelectionTimeoutError

from api.application import create_app, create_asgi_app
from infrastructure.mongo_connection import MongoConnection
from services.mongo_message_store import MongoMessageStore


@pytest.mark.unit
class TestLifespan:
    """Test cases for the FastAPI lifespan"""

    async def test_injected_store_skips_mongo(self, settings, message_store, hub):
        app = create_app(settings, message_store=message_store, hub=hub)
        app.state.sio.shutdown = AsyncMock()

        with patch('api.application.mongo_connection') as mock_connection:
            async with app.router.lifespan_context(app):
                assert app.state.gateway.store is message_store

        mock_connection.connect.assert_not_called()
        mock_connection.disconnect.assert_not_called()

    async def test_mongo_store_connected_and_closed(self, settings, hub):
        app = create_app(settings, hub=hub)
        app.state.sio.shutdown = AsyncMock()

        with patch('api.application.mongo_connection') as mock_connection:
            mock_connection.connect = AsyncMock()
            mock_connection.disconnect = AsyncMock()
            mock_connection.get_collection.return_value = MagicMock()

            async with app.router.lifespan_context(app):
                mock_connection.connect.assert_awaited_once_with(settings)
                assert isinstance(app.state.gateway.store, MongoMessageStore)

            app.state.sio.shutdown.assert_awaited_once()
            mock_connection.disconnect.assert_awaited_once()
            assert app.state.gateway.store is None

    def test_asgi_app_wraps_fastapi(self, app):
        asgi_app = create_asgi_app(app)

        assert asgi_app.other_asgi_app is app


@pytest.mark.unit
class TestMongoConnection:
    """Test cases for MongoConnection"""

    @patch('infrastructure.mongo_connection.AsyncIOMotorClient')
    async def test_connect_pings_and_indexes(self, mock_client_cls, settings):
        client = MagicMock()
        client.admin.command = AsyncMock()
        collection = MagicMock()
        collection.create_index = AsyncMock()
        client.__getitem__.return_value.__getitem__.return_value = collection
        mock_client_cls.return_value = client
        connection = MongoConnection()

        await connection.connect(settings)

        client.admin.command.assert_awaited_once_with("ping")
        collection.create_index.assert_awaited_once_with([("timestamp", ASCENDING), ("_id", ASCENDING)])
        assert connection.get_collection() is collection

        await connection.disconnect()

        client.close.assert_called_once()
        with pytest.raises(RuntimeError):
            connection.get_collection()

    @patch('infrastructure.mongo_connection.AsyncIOMotorClient')
    async def test_connect_failure_resets_state(self, mock_client_cls, settings):
        client = MagicMock()
        client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        mock_client_cls.return_value = client
        connection = MongoConnection()

        with pytest.raises(ServerSelectionTimeoutError):
            await connection.connect(settings)

        assert connection.client is None
        client.close.assert_called_once()
