# app/models/__init__.py

from models.message import ChatMessage

__all__ = ["ChatMessage"]
