# app/api/socketio/__init__.py

"""
Socket.IO layer for real-time chat features

The default namespace ('/') carries every chat event:
- client -> server: set-username, typing, mark-as-seen
- server -> client: online-users, new-message, typing, message-seen, error

Register it on a server with:
    sio.register_namespace(ChatNamespace(gateway))
"""

from .chat_namespace import ChatNamespace


__all__ = ['ChatNamespace']
