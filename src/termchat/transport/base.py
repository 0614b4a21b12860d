"""Abstract base class for chat transports.

This module defines the interface the UI loop uses to talk to the network.
The abstraction hides:
- Wire protocol and authentication
- Connection management
- How incoming messages are buffered before the UI drains them
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from ..ui.models import ChatMessage


class ChatTransport(ABC):
    """Abstract chat transport.

    Supports async context manager protocol for proper resource cleanup:
        async with transport:
            await transport.send("hello")
        # Automatically disconnected
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection gracefully. Ends the receive stream."""

    @abstractmethod
    async def send(self, text: str) -> None:
        """Deliver one outgoing chat line.

        Raises:
            TransportError: If the line could not be delivered
        """

    @abstractmethod
    def receive(self) -> AsyncIterator[ChatMessage]:
        """Stream of incoming messages. Finishes when the connection closes."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "ChatTransport":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
