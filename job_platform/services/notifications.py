"""
Real-time notifications over WebSocket channels.

ConnectionManager owns the live sockets; NotificationDispatcher pushes
events to the channel an employer registered through the PresenceRegistry.

Delivery is best-effort: no queue, no retry, no acknowledgement. A missing
channel or a failed send is logged and otherwise ignored.
"""

import asyncio
import uuid
from typing import Dict, Set

from fastapi import WebSocket

from job_platform.core.logging import get_logger
from job_platform.services.presence import PresenceRegistry

logger = get_logger(__name__)


class ConnectionManager:
    """Live WebSocket connections keyed by a generated channel id."""

    def __init__(self):
        self._sockets: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        channel_id = uuid.uuid4().hex
        self._sockets[channel_id] = websocket
        logger.info("New client connected, channel id: %s", channel_id)
        return channel_id

    def disconnect(self, channel_id: str) -> None:
        self._sockets.pop(channel_id, None)

    async def send_json(self, channel_id: str, message: dict) -> None:
        """Raises KeyError if the channel is not connected."""
        websocket = self._sockets[channel_id]
        await websocket.send_json(message)

    def __len__(self) -> int:
        return len(self._sockets)


class NotificationDispatcher:
    """
    Pushes {"event": ..., "data": ...} frames to a connected employer.

    `channels` is anything with an async send_json(channel_id, message),
    normally the ConnectionManager.
    """

    def __init__(self, presence: PresenceRegistry, channels):
        self.presence = presence
        self.channels = channels
        self._pending: Set[asyncio.Task] = set()

    async def dispatch(self, employer_id: str, event: str, payload: dict) -> bool:
        """Send one event. Returns True if it was written to a channel."""
        channel_id = self.presence.lookup(employer_id)
        if channel_id is None:
            logger.debug("No channel for employer %s, %s not sent", employer_id, event)
            return False

        try:
            await self.channels.send_json(channel_id, {"event": event, "data": payload})
        except Exception as e:
            logger.warning("Failed to send %s to employer %s: %s", event, employer_id, e)
            return False

        logger.info("Notification %s emitted to employer %s", event, employer_id)
        return True

    def dispatch_nowait(self, employer_id: str, event: str, payload: dict) -> None:
        """Schedule dispatch() on the running loop and return immediately."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, %s for employer %s dropped", event, employer_id)
            return

        task = loop.create_task(self.dispatch(employer_id, event, payload))
        # Hold a reference until the task finishes
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self, timeout: float = 5.0) -> int:
        """
        Wait up to `timeout` seconds for scheduled deliveries.

        Deliveries still running after that are cancelled; returns how many.
        """
        pending = list(self._pending)
        if not pending:
            return 0

        _, stalled = await asyncio.wait(pending, timeout=timeout)
        for task in stalled:
            task.cancel()
        if stalled:
            logger.warning("Dropped %d undelivered notification(s)", len(stalled))
        return len(stalled)

    @property
    def pending(self) -> int:
        return len(self._pending)
