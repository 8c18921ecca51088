# app/api/application.py

from contextlib import asynccontextmanager
from typing import Optional
import logging
import time

import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import default, messages
from api.exception_handlers import register_exception_handlers
from api.socketio import ChatNamespace
from config.settings import Settings
from infrastructure.mongo_connection import mongo_connection
from infrastructure.socketio_manager import create_sio
from services.broadcast_hub import BroadcastHub, SocketIOBroadcastHub
from services.chat_gateway import ChatGateway
from services.message_store import MessageStore
from services.mongo_message_store import MongoMessageStore
from services.presence_tracker import PresenceTracker

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    message_store: Optional[MessageStore] = None,
    hub: Optional[BroadcastHub] = None,
    sio: Optional[socketio.AsyncServer] = None
) -> FastAPI:
    """
    Build the FastAPI application and its Socket.IO server.

    When no message_store is given the lifespan connects to MongoDB and
    uses MongoMessageStore; the Mongo client is closed on shutdown.
    The Socket.IO server is exposed as app.state.sio and the gateway as
    app.state.gateway.
    """
    sio = sio or create_sio(settings)
    gateway = ChatGateway(
        store=message_store,
        presence=PresenceTracker(),
        hub=hub or SocketIOBroadcastHub(sio),
    )
    sio.register_namespace(ChatNamespace(gateway))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan events"""
        # Startup: Initialize connections
        owns_store = gateway.store is None
        if owns_store:
            await mongo_connection.connect(settings)
            gateway.store = MongoMessageStore(mongo_connection.get_collection())
        logger.info(f"{settings.APP_NAME} ready, accepting connections from {settings.CLIENT_URI}")

        yield

        # Shutdown: Disconnect sockets, then close the store connection
        await sio.shutdown()
        if owns_store:
            await mongo_connection.disconnect()
            gateway.store = None
        logger.info(f"{settings.APP_NAME} stopped")

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.gateway = gateway
    app.state.sio = sio

    # Register domain exception handlers
    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        total = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {total:.1f} ms")
        return response

    # CORS - only the configured frontend may call the API
    app.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=[settings.CLIENT_URI],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(default.router)
    app.include_router(messages.router, prefix="/api")

    return app


def create_asgi_app(app: FastAPI) -> socketio.ASGIApp:
    """
    Wrap the FastAPI app with Socket.IO.

    Socket.IO handles /socket.io/* paths and passes everything else
    (lifespan included) to FastAPI.
    """
    return socketio.ASGIApp(app.state.sio, app)
