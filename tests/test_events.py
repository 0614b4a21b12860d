"""Unit tests for the event source."""
import asyncio

import pytest

from termchat.config import TerminalConfig
from termchat.errors import TerminalError
from termchat.ui.events import EventSource, KeyPress, Tick

# Long enough that no tick arrives during a test
NO_TICKS = 60_000


async def collect_keys(events: EventSource, count: int, timeout: float = 2.0) -> list[str]:
    keys: list[str] = []

    async def _collect():
        while len(keys) < count:
            event = await events.next()
            if isinstance(event, KeyPress):
                keys.append(event.key)

    await asyncio.wait_for(_collect(), timeout)
    return keys


class TestEventSource:
    """Tests for EventSource."""

    @pytest.mark.asyncio
    async def test_ticks_are_emitted(self, scripted_reader):
        """Test that the timer produces Tick events."""
        async with EventSource(scripted_reader([]), tick_delay=5) as events:
            event = await asyncio.wait_for(events.next(), 1.0)

        assert event == Tick()

    @pytest.mark.asyncio
    async def test_keys_delivered_once_in_order(self, scripted_reader):
        """Test that every key arrives exactly once, in order."""
        reader = scripted_reader(["a", "b", "esc"])
        async with EventSource(reader, tick_delay=NO_TICKS, poll_interval=0.01) as events:
            keys = await collect_keys(events, 3)
            with pytest.raises(TimeoutError):
                await asyncio.wait_for(events.next(), 0.1)

        assert keys == ["a", "b", "esc"]

    @pytest.mark.asyncio
    async def test_keys_and_ticks_interleave(self, scripted_reader):
        """Test that key presses are not starved by ticks."""
        reader = scripted_reader(["x", "y"], delay=0.02)
        async with EventSource(reader, tick_delay=5, poll_interval=0.01) as events:
            keys = await collect_keys(events, 2)

        assert keys == ["x", "y"]

    @pytest.mark.asyncio
    async def test_exit_key_stops_watcher(self, scripted_reader):
        """Test the legacy exit key: delivered, then polling ends."""
        reader = scripted_reader(["a", "q", "b"])
        source = EventSource(reader, tick_delay=NO_TICKS, exit_key="q", poll_interval=0.01)
        async with source as events:
            keys = await collect_keys(events, 2)
            with pytest.raises(TimeoutError):
                await asyncio.wait_for(events.next(), 0.2)

        assert keys == ["a", "q"]
        assert not reader.exhausted

    @pytest.mark.asyncio
    async def test_reader_failure_is_raised_by_next(self, failing_reader):
        """Test that a broken terminal surfaces in the consumer."""
        reader = failing_reader(TerminalError("input stream closed"))
        async with EventSource(reader, tick_delay=NO_TICKS) as events:
            with pytest.raises(TerminalError):
                await asyncio.wait_for(events.next(), 1.0)

    @pytest.mark.asyncio
    async def test_next_requires_start(self, scripted_reader):
        """Test that an unstarted source cannot be consumed."""
        with pytest.raises(RuntimeError):
            await EventSource(scripted_reader([])).next()

    @pytest.mark.asyncio
    async def test_not_restartable(self, scripted_reader):
        """Test that a closed source stays closed."""
        events = EventSource(scripted_reader([]), tick_delay=5)
        async with events:
            pass

        with pytest.raises(RuntimeError):
            await events.start()
        with pytest.raises(RuntimeError):
            await events.next()

    @pytest.mark.asyncio
    async def test_async_iteration(self, scripted_reader):
        """Test using the source with async for."""
        async with EventSource(scripted_reader([]), tick_delay=5) as events:
            seen = []
            async for event in events:
                seen.append(event)
                if len(seen) == 2:
                    break

        assert seen == [Tick(), Tick()]

    def test_from_config(self, scripted_reader):
        """Test building the source from terminal settings."""
        events = EventSource.from_config(
            TerminalConfig(tick_delay=40, exit_key="q"), scripted_reader([])
        )
        assert events.started is False
