# app/services/chat_gateway.py

from typing import Any, Optional
import logging

from pydantic import ValidationError

from models.message import ChatMessage
from schemas.chat_schema import MarkAsSeenEvent, MessageSeenResponse, SocketErrorResponse
from services.message_store import MessageStore
from services.presence_tracker import PresenceTracker
from services.broadcast_hub import BroadcastHub
from infrastructure.socketio_manager import ConnectionManager
from exceptions.domain_exceptions import DomainException

logger = logging.getLogger(__name__)


# Event names on the wire
NEW_MESSAGE = 'new-message'
ONLINE_USERS = 'online-users'
TYPING = 'typing'
MESSAGE_SEEN = 'message-seen'
ERROR = 'error'


class ChatGateway:
    """
    Orchestrates the message store, presence tracker and broadcast hub.

    Request-path methods (list_messages, post_message) let domain exceptions
    propagate to the HTTP exception handlers. Event-path methods (everything
    keyed by sid) catch failures, log them and report them to the submitting
    connection only.
    """

    def __init__(
        self,
        store: Optional[MessageStore],
        presence: PresenceTracker,
        hub: BroadcastHub,
        connections: Optional[ConnectionManager] = None
    ):
        self.store = store
        self.presence = presence
        self.hub = hub
        self.connections = connections or ConnectionManager()

    # Request-driven

    async def list_messages(self) -> list[ChatMessage]:
        return await self.store.list_messages()

    async def post_message(self, username: Optional[str], content: Optional[str]) -> ChatMessage:
        """Persist a message, then fan it out to every connection"""
        message = await self.store.create_message(username, content)
        logger.info(f"Message {message.id} saved for {message.username}")
        await self.hub.publish(NEW_MESSAGE, message.to_payload())
        return message

    # Event-driven

    async def handle_connect(self, sid: str):
        """Send the new connection the current online list, point-to-point"""
        await self.hub.send_to(sid, ONLINE_USERS, self.presence.list_users())

    async def set_username(self, sid: str, username: Any):
        if not isinstance(username, str) or not username.strip():
            logger.warning(f"Rejected set-username from {sid}: {username!r}")
            await self._report(sid, 'username must be a non-empty string')
            return

        previous = self.connections.bind(sid, username)
        if previous is not None and not self.connections.has_sessions(previous):
            self.presence.remove_user(previous)

        online_users = self.presence.add_user(username)
        await self.hub.publish(ONLINE_USERS, online_users)

    async def typing(self, sid: str, username: Any):
        if not isinstance(username, str) or not username:
            # Typing indicators are ephemeral, ignore garbage
            logger.debug(f"Invalid typing payload from {sid}: {username!r}")
            return
        await self.hub.publish(TYPING, username, exclude_sid=sid)

    async def mark_as_seen(self, sid: str, data: Any):
        try:
            event = MarkAsSeenEvent.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid mark-as-seen payload from {sid}: {e}")
            await self._report(sid, 'Invalid data format', errors=e.errors(include_url=False, include_context=False))
            return

        try:
            await self.store.mark_seen(event.message_id, event.username)
        except DomainException as e:
            logger.warning(f"mark-as-seen failed for message {event.message_id} ({event.username}): {e.message}")
            await self._report(sid, e.message)
            return

        response = MessageSeenResponse(message_id=event.message_id, username=event.username)
        await self.hub.publish(MESSAGE_SEEN, response.model_dump(mode='json', by_alias=True))

    async def handle_disconnect(self, sid: str):
        username = self.connections.unbind(sid)
        if username is not None and not self.connections.has_sessions(username):
            self.presence.remove_user(username)
        await self.hub.publish(ONLINE_USERS, self.presence.list_users())

    async def _report(self, sid: str, message: str, errors: Optional[list] = None):
        error_response = SocketErrorResponse(message=message, errors=errors)
        await self.hub.send_to(sid, ERROR, error_response.model_dump(mode='json'))
