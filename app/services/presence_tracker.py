# app/services/presence_tracker.py

import logging

logger = logging.getLogger(__name__)


class PresenceTracker:
    """
    In-memory registry of online usernames.

    Insertion ordered, each username at most once. State lives for the
    process lifetime only. All mutations run on the asyncio event loop,
    so add/remove/list never interleave; a threaded server would need a
    lock around them.
    """

    def __init__(self):
        self._online_users: list[str] = []

    def add_user(self, name: str) -> list[str]:
        """Add name if absent and return the current online list"""
        if name not in self._online_users:
            self._online_users.append(name)
            logger.info(f"User {name} is now online ({len(self._online_users)} online)")
        return self.list_users()

    def remove_user(self, name: str) -> list[str]:
        """Remove name if present (no error otherwise) and return the current online list"""
        if name in self._online_users:
            self._online_users.remove(name)
            logger.info(f"User {name} went offline ({len(self._online_users)} online)")
        return self.list_users()

    def list_users(self) -> list[str]:
        return list(self._online_users)
