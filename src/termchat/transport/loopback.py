"""Loopback chat transport.

Echoes every sent line back as an incoming remote message.
Nothing leaves the process; useful offline and in tests.
"""

import asyncio
from collections.abc import AsyncIterator

from ..errors import TransportError
from ..ui.formatting import format_timestamp
from ..ui.models import ChatMessage
from .base import ChatTransport


class LoopbackTransport(ChatTransport):
    """Transport that answers each send with an echo from echo_author."""

    def __init__(
        self,
        echo_author: str = "echo",
        date_format: str = "%H:%M:%S",
    ):
        self._echo_author = echo_author
        self._date_format = date_format
        self._incoming: asyncio.Queue[ChatMessage | None] = asyncio.Queue()
        self._connected = False
        self.sent: list[str] = []

    async def connect(self) -> None:
        """Mark the transport connected."""
        self._connected = True

    async def disconnect(self) -> None:
        """Mark disconnected and end the receive stream."""
        if self._connected:
            self._connected = False
            self._incoming.put_nowait(None)

    async def send(self, text: str) -> None:
        """Record the line and queue its echo."""
        if not self._connected:
            raise TransportError("not connected", backend=self.backend_type)
        self.sent.append(text)
        self._incoming.put_nowait(
            ChatMessage(
                timestamp=format_timestamp(self._date_format),
                author=self._echo_author,
                content=text,
                is_remote=True,
            )
        )

    async def receive(self) -> AsyncIterator[ChatMessage]:
        """Yield echoed messages until disconnect."""
        while True:
            message = await self._incoming.get()
            if message is None:
                return
            yield message

    @property
    def backend_type(self) -> str:
        return "loopback"
