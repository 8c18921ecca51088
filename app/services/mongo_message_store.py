# app/services/mongo_message_store.py

from datetime import datetime, UTC
from typing import Optional
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from models.message import ChatMessage
from services.message_store import MessageStore, require_text
from exceptions.domain_exceptions import NotFoundException, StoreUnavailableException

logger = logging.getLogger(__name__)


def utc_now_millis() -> datetime:
    """Current UTC time truncated to the millisecond precision of BSON datetimes"""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class MongoMessageStore(MessageStore):
    """Message store backed by a MongoDB collection (motor)"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def list_messages(self) -> list[ChatMessage]:
        try:
            # _id breaks timestamp ties in insertion order
            cursor = self.collection.find().sort([("timestamp", ASCENDING), ("_id", ASCENDING)])
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list messages: {e}")
            raise StoreUnavailableException(message="Failed to load messages") from e

        return [ChatMessage.from_document(doc) for doc in documents]

    async def create_message(self, username: Optional[str], content: Optional[str]) -> ChatMessage:
        username = require_text("username", username)
        content = require_text("content", content)

        document = {
            "username": username,
            "content": content,
            "timestamp": utc_now_millis(),
            "delivered": True,
            "seenBy": [],
        }
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to save message from {username}: {e}")
            raise StoreUnavailableException(message="Failed to save message") from e

        document["_id"] = result.inserted_id
        return ChatMessage.from_document(document)

    async def mark_seen(self, message_id: str, username: str) -> ChatMessage:
        username = require_text("username", username)

        if not isinstance(message_id, str) or not ObjectId.is_valid(message_id):
            raise NotFoundException(
                message="Message not found",
                details={"message_id": message_id}
            )
        object_id = ObjectId(message_id)

        try:
            # $addToSet keeps seenBy free of duplicates
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$addToSet": {"seenBy": username}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to mark message {message_id} as seen by {username}: {e}")
            raise StoreUnavailableException(message="Failed to update message") from e

        if document is None:
            raise NotFoundException(
                message="Message not found",
                details={"message_id": message_id}
            )

        return ChatMessage.from_document(document)
