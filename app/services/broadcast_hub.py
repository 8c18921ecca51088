# app/services/broadcast_hub.py

from abc import ABC, abstractmethod
from typing import Any, Optional
import asyncio
import logging

import socketio

logger = logging.getLogger(__name__)


class BroadcastHub(ABC):
    """
    Fire-and-forget fan-out to every connected participant.

    publish() delivers globally, or to everyone except exclude_sid.
    send_to() delivers to a single participant.
    No acknowledgement and no retry.
    """

    @abstractmethod
    async def publish(self, event: str, payload: Any, exclude_sid: Optional[str] = None) -> None:
        ...

    @abstractmethod
    async def send_to(self, sid: str, event: str, payload: Any) -> None:
        ...


class SocketIOBroadcastHub(BroadcastHub):
    """Hub that emits through a python-socketio server namespace"""

    def __init__(self, sio: socketio.AsyncServer, namespace: str = '/'):
        self.sio = sio
        self.namespace = namespace

    async def publish(self, event: str, payload: Any, exclude_sid: Optional[str] = None) -> None:
        await self.sio.emit(event, payload, namespace=self.namespace, skip_sid=exclude_sid)

    async def send_to(self, sid: str, event: str, payload: Any) -> None:
        await self.sio.emit(event, payload, to=sid, namespace=self.namespace)


class InProcessBroadcastHub(BroadcastHub):
    """
    Hub delivering into one FIFO queue per attached participant.

    Each queue receives (event, payload) tuples in publish order.
    """

    def __init__(self):
        self.queues: dict[str, asyncio.Queue] = {}

    def attach(self, sid: str) -> asyncio.Queue:
        if sid not in self.queues:
            self.queues[sid] = asyncio.Queue()
        return self.queues[sid]

    def detach(self, sid: str) -> None:
        self.queues.pop(sid, None)

    async def publish(self, event: str, payload: Any, exclude_sid: Optional[str] = None) -> None:
        for sid, queue in list(self.queues.items()):
            if sid == exclude_sid:
                continue
            queue.put_nowait((event, payload))

    async def send_to(self, sid: str, event: str, payload: Any) -> None:
        queue = self.queues.get(sid)
        if queue is None:
            # Participant already gone, drop silently
            logger.debug(f"Dropping {event} for detached participant {sid}")
            return
        queue.put_nowait((event, payload))

    def drain(self, sid: str) -> list[tuple[str, Any]]:
        """Return and clear everything queued for sid"""
        queue = self.queues.get(sid)
        events = []
        while queue is not None and not queue.empty():
            events.append(queue.get_nowait())
        return events
