"""Unit tests for the chat transport module."""
import pytest

from termchat.errors import TransportError
from termchat.transport import ChatTransport, LoopbackTransport, create_transport


class TestChatTransport:
    """Tests for the abstract ChatTransport interface."""

    def test_transport_is_abstract(self):
        """Test that ChatTransport cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ChatTransport()  # type: ignore


class TestLoopbackTransport:
    """Tests for LoopbackTransport."""

    @pytest.mark.asyncio
    async def test_send_is_echoed_as_remote_message(self):
        """Test that each sent line comes back from the echo author."""
        async with LoopbackTransport(echo_author="bot", date_format="%H:%M") as transport:
            await transport.send("ping")
            stream = transport.receive()
            echoed = await stream.__anext__()

        assert echoed.author == "bot"
        assert echoed.content == "ping"
        assert echoed.is_remote is True
        assert len(echoed.timestamp) == len("00:00")
        assert transport.sent == ["ping"]

    @pytest.mark.asyncio
    async def test_receive_ends_on_disconnect(self):
        """Test that disconnect finishes the receive stream."""
        transport = LoopbackTransport()
        await transport.connect()
        await transport.send("one")
        await transport.disconnect()

        received = [m.content async for m in transport.receive()]

        assert received == ["one"]

    @pytest.mark.asyncio
    async def test_send_when_disconnected_fails(self):
        """Test that sending needs a connection."""
        with pytest.raises(TransportError, match="loopback"):
            await LoopbackTransport().send("lost")


class TestTransportFactory:
    """Tests for create_transport."""

    def test_create_loopback(self):
        """Test creating the loopback transport."""
        transport = create_transport("loopback", echo_author="bot")
        assert isinstance(transport, LoopbackTransport)
        assert transport.backend_type == "loopback"

    def test_unknown_backend_raises(self):
        """Test that unsupported backends are rejected."""
        with pytest.raises(ValueError, match="Unsupported transport backend"):
            create_transport("irc")
