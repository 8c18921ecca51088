# app/infrastructure/socketio_manager.py

import socketio
from typing import Dict, Optional
from config.settings import Settings
import logging

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks which username is bound to each live Socket.IO session"""

    def __init__(self):
        # Maps username to list of their session_ids (sids)
        self.active_connections: Dict[str, list[str]] = {}
        # Maps session_id to the username bound by set-username
        self.sid_to_username: Dict[str, str] = {}

    def bind(self, sid: str, username: str) -> Optional[str]:
        """
        Bind a username to a session.

        Args:
            sid: Socket.IO session ID
            username: Name sent with set-username

        Returns:
            The username previously bound to this sid, or None
        """
        previous = self.sid_to_username.get(sid)
        if previous == username:
            return None
        if previous is not None:
            self._release(sid, previous)

        self.sid_to_username[sid] = username
        sessions = self.active_connections.setdefault(username, [])
        if sid not in sessions:
            sessions.append(sid)

        logger.info(f"Session {sid} bound to {username}")
        return previous

    def unbind(self, sid: str) -> Optional[str]:
        """Forget the username bound to a session and return it (None if it never set one)"""
        username = self.sid_to_username.pop(sid, None)
        if username is not None:
            self._release(sid, username)
        return username

    def _release(self, sid: str, username: str):
        sessions = self.active_connections.get(username)
        if sessions and sid in sessions:
            sessions.remove(sid)
        if not sessions:
            self.active_connections.pop(username, None)

    def get_username(self, sid: str) -> Optional[str]:
        """Get the username bound to a session"""
        return self.sid_to_username.get(sid)

    def has_sessions(self, username: str) -> bool:
        """Check if any live session is still bound to username"""
        return bool(self.active_connections.get(username))


def create_sio(settings: Settings) -> socketio.AsyncServer:
    """
    Create the Socket.IO server.

    Handlers run inline (async_handlers=False) so that one connection's
    events are processed in the order they were sent.
    """
    return socketio.AsyncServer(
        async_mode='asgi',
        cors_allowed_origins=[settings.CLIENT_URI],
        async_handlers=False,
        logger=settings.DEBUG,
        engineio_logger=settings.DEBUG,
        ping_timeout=60,
        ping_interval=25
    )
