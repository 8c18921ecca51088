# app/schemas/chat_schema.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# HTTP Request DTOs

class CreateMessageRequest(BaseModel):
    """Schema for POST /api/messages.

    Both fields are optional at the schema level so that a missing or empty
    field is reported by the store as a 400 ValidationException.
    """
    username: Optional[str] = None
    content: Optional[str] = None


class ServerStatusResponse(BaseModel):
    """Schema for the root status endpoint"""
    message: str
    requestip: Optional[str] = None


# Socket.IO Event DTOs

class MarkAsSeenEvent(BaseModel):
    """Schema for mark-as-seen Socket.IO event"""
    message_id: str = Field(..., alias="messageId", min_length=1)
    username: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)


# Socket.IO Response Models

class MessageSeenResponse(BaseModel):
    """Schema for message-seen event"""
    message_id: str = Field(..., alias="messageId")
    username: str

    model_config = ConfigDict(populate_by_name=True)


class SocketErrorResponse(BaseModel):
    """Schema for error responses emitted via Socket.IO"""
    message: str
    errors: Optional[list] = None
