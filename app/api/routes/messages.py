# app/api/routes/messages.py

from fastapi import APIRouter, Depends, Request, status
from services.chat_gateway import ChatGateway
from models.message import ChatMessage
from schemas.chat_schema import CreateMessageRequest

router = APIRouter(prefix="/messages", tags=["messages"])


def get_gateway(request: Request) -> ChatGateway:
    """Dependency returning the gateway created at application startup"""
    return request.app.state.gateway


@router.get("", response_model=list[ChatMessage])
async def list_messages(gateway: ChatGateway = Depends(get_gateway)):
    """
    Get the full chat history, oldest first
    
    Returns:
        Every stored message sorted ascending by timestamp
    """
    return await gateway.list_messages()


@router.post("", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def create_message(
    request: CreateMessageRequest,
    gateway: ChatGateway = Depends(get_gateway)
):
    """
    Save a new message and broadcast it to every connected socket
    
    Workflow:
    1. Validate username and content (400 if missing or empty)
    2. Persist the message with delivered=true
    3. Emit new-message to all Socket.IO clients
    
    Args:
        request: Message author and body
        gateway: Chat gateway
        
    Returns:
        The created message
    """
    return await gateway.post_message(request.username, request.content)
