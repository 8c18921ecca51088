# app/api/socketio/chat_namespace.py

import socketio
from services.chat_gateway import ChatGateway
from schemas.chat_schema import SocketErrorResponse
import logging

logger = logging.getLogger(__name__)


class ChatNamespace(socketio.AsyncNamespace):
    """Socket.IO namespace for presence, typing indicators and read-receipts"""

    def __init__(self, gateway: ChatGateway, namespace: str = '/'):
        super().__init__(namespace)
        self.gateway = gateway

    async def trigger_event(self, event, *args):
        # Wire events are kebab-case (set-username, mark-as-seen)
        return await super().trigger_event((event or '').replace('-', '_'), *args)

    async def on_connect(self, sid, environ, auth=None):
        logger.info(f"Client connected to {self.namespace}: {sid}")
        try:
            await self.gateway.handle_connect(sid)
        except Exception:
            logger.exception(f"Error sending online users to {sid}")

    async def on_disconnect(self, sid, reason=None):
        username = self.gateway.connections.get_username(sid) or "anonymous"
        logger.info(f"Client disconnected from {self.namespace}: {sid} as {username} ({reason or 'unknown reason'})")
        try:
            await self.gateway.handle_disconnect(sid)
        except Exception:
            logger.exception(f"Error handling disconnect of {sid}")

    async def on_set_username(self, sid, username):
        try:
            await self.gateway.set_username(sid, username)
        except Exception as e:
            logger.error(f"Error in set-username: {str(e)}")
            await self._emit_error(sid, 'Failed to set username')

    async def on_typing(self, sid, username):
        try:
            await self.gateway.typing(sid, username)
        except Exception as e:
            logger.error(f"Error in typing: {str(e)}")

    async def on_mark_as_seen(self, sid, data):
        try:
            await self.gateway.mark_as_seen(sid, data)
        except Exception as e:
            logger.error(f"Error in mark-as-seen: {str(e)}")
            await self._emit_error(sid, 'Failed to mark message as seen')

    async def _emit_error(self, sid, message: str):
        error_response = SocketErrorResponse(message=message)
        try:
            await self.emit('error', error_response.model_dump(mode='json'), room=sid)
        except Exception:
            logger.exception(f"Could not report error to {sid}")
