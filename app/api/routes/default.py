# app/api/routes/default.py

from fastapi import APIRouter, Request
from schemas.chat_schema import ServerStatusResponse

router = APIRouter()


@router.get("/", response_model=ServerStatusResponse)
async def root(request: Request):
    """Liveness message echoing the caller's address"""
    return ServerStatusResponse(
        message="server running...",
        requestip=request.client.host if request.client else None
    )


# Health check endpoint
@router.get("/health")
async def health_check():
    """Health check endpoint for Docker and monitoring"""
    return {"status": "healthy"}
