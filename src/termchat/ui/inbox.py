"""Non-blocking inbox for incoming chat messages.

Hides the channel between the transport and the UI loop. The loop only
ever asks for one message at a time and never waits for it.
"""

import asyncio
from collections.abc import AsyncIterator

import structlog

from .models import ChatMessage

logger = structlog.get_logger(__name__)


class MessageInbox:
    """Drain point over an asyncio queue of incoming messages.

    The queue does the buffering; this class applies no bound.
    """

    def __init__(self, queue: asyncio.Queue[ChatMessage] | None = None) -> None:
        self._queue: asyncio.Queue[ChatMessage] = queue if queue is not None else asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once the producer has gone away."""
        return self._closed

    def put(self, message: ChatMessage) -> None:
        """Queue a message (producer side)."""
        self._queue.put_nowait(message)

    def try_drain_one(self) -> ChatMessage | None:
        """Return the next queued message, or None without waiting."""
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    async def feed(self, stream: AsyncIterator[ChatMessage]) -> None:
        """Pump a transport's receive stream into the inbox until it ends.

        Messages already queued stay drainable after the stream ends.
        """
        try:
            async for message in stream:
                self.put(message)
        finally:
            self._closed = True
            logger.info("inbox_closed", pending=self._queue.qsize())

    def __len__(self) -> int:
        return self._queue.qsize()
