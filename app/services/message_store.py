# app/services/message_store.py

from abc import ABC, abstractmethod
from datetime import datetime, UTC
from typing import Optional
import logging
import uuid

from models.message import ChatMessage
from exceptions.domain_exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)


def require_text(field: str, value: Optional[str]) -> str:
    """Return value if it is a non-blank string, raise ValidationException otherwise"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(
            message=f"{field} is required",
            details={"field": field}
        )
    return value


class MessageStore(ABC):
    """
    Durable, append-only collection of chat messages.

    Implementations:
    - MongoMessageStore (services/mongo_message_store.py): MongoDB via motor
    - InMemoryMessageStore: process-local, used in tests and local runs
    """

    @abstractmethod
    async def list_messages(self) -> list[ChatMessage]:
        """Return all messages ordered ascending by timestamp"""

    @abstractmethod
    async def create_message(self, username: Optional[str], content: Optional[str]) -> ChatMessage:
        """Validate and persist a new message (delivered=True, empty seenBy)"""

    @abstractmethod
    async def mark_seen(self, message_id: str, username: str) -> ChatMessage:
        """Idempotently add username to the message's seenBy set"""


class InMemoryMessageStore(MessageStore):
    """Message store kept in a plain list, insertion ordered"""

    def __init__(self):
        self._messages: list[ChatMessage] = []

    async def list_messages(self) -> list[ChatMessage]:
        # sorted() is stable, so equal timestamps keep insertion order
        ordered = sorted(self._messages, key=lambda m: m.timestamp)
        return [m.model_copy(deep=True) for m in ordered]

    async def create_message(self, username: Optional[str], content: Optional[str]) -> ChatMessage:
        username = require_text("username", username)
        content = require_text("content", content)

        message = ChatMessage(
            id=uuid.uuid4().hex,
            username=username,
            content=content,
            timestamp=datetime.now(UTC),
            delivered=True,
            seen_by=[],
        )
        self._messages.append(message)
        return message.model_copy(deep=True)

    async def mark_seen(self, message_id: str, username: str) -> ChatMessage:
        username = require_text("username", username)

        for message in self._messages:
            if message.id == message_id:
                if username not in message.seen_by:
                    message.seen_by.append(username)
                return message.model_copy(deep=True)

        raise NotFoundException(
            message="Message not found",
            details={"message_id": message_id}
        )
