# app/models/message.py

from datetime import datetime
from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Chat message document as stored in the messages collection"""
    id: str = Field(alias="_id")
    username: str
    content: str
    timestamp: datetime
    delivered: bool = False
    seen_by: list[str] = Field(default_factory=list, alias="seenBy")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "ChatMessage":
        """Build a message from a raw MongoDB document (ObjectId _id)"""
        return cls(
            id=str(document["_id"]),
            username=document["username"],
            content=document["content"],
            timestamp=document["timestamp"],
            delivered=document.get("delivered", False),
            seen_by=list(document.get("seenBy", [])),
        )

    def to_payload(self) -> dict:
        """JSON-ready dict with wire field names, as emitted over Socket.IO"""
        return self.model_dump(mode="json", by_alias=True)

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, username={self.username}, seen_by={self.seen_by})>"
