"""Event source for the UI loop.

Hides how the two timing sources are merged:
- A timer task emitting Tick every tick_delay milliseconds
- A key watcher thread polling a KeyReader and emitting KeyPress

Both producers feed one asyncio.Queue; the loop is its only consumer and
suspends nowhere else.
"""

import asyncio
import contextlib
import threading
from dataclasses import dataclass

import structlog

from ..config.models import TerminalConfig
from .keys import KeyReader

logger = structlog.get_logger(__name__)

# Seconds the key watcher waits per poll before checking for a stop request
KEY_POLL_INTERVAL = 0.05


@dataclass(frozen=True)
class Tick:
    """Periodic redraw tick."""


@dataclass(frozen=True)
class KeyPress:
    """A single decoded key press."""

    key: str


Event = Tick | KeyPress


@dataclass(frozen=True)
class _WatcherFailed:
    error: BaseException


class EventSource:
    """Lazy, infinite, non-restartable stream of Tick and KeyPress events.

    Example:
        async with EventSource(TerminalKeyReader(), tick_delay=30) as events:
            event = await events.next()
    """

    def __init__(
        self,
        key_reader: KeyReader,
        tick_delay: int = 30,
        exit_key: str | None = None,
        poll_interval: float = KEY_POLL_INTERVAL,
    ) -> None:
        """Initialize the event source.

        Args:
            key_reader: Where key presses come from
            tick_delay: Milliseconds between Tick events
            exit_key: Key after which the watcher stops polling (None disables)
            poll_interval: Seconds per key poll
        """
        self._reader = key_reader
        self._tick_seconds = tick_delay / 1000
        self._exit_key = exit_key
        self._poll_interval = poll_interval
        self._queue: asyncio.Queue[Event | _WatcherFailed] = asyncio.Queue()
        self._stop = threading.Event()
        self._tick_task: asyncio.Task | None = None
        self._watcher: threading.Thread | None = None
        self._closed = False

    @classmethod
    def from_config(cls, config: TerminalConfig, key_reader: KeyReader) -> "EventSource":
        return cls(key_reader, tick_delay=config.tick_delay, exit_key=config.exit_key)

    @property
    def started(self) -> bool:
        return self._tick_task is not None

    async def start(self) -> None:
        """Start the timer task and the key watcher thread."""
        if self._closed or self.started:
            raise RuntimeError("event source cannot be restarted")
        loop = asyncio.get_running_loop()
        self._tick_task = asyncio.create_task(self._tick())
        self._watcher = threading.Thread(
            target=self._watch_keys,
            args=(loop,),
            name="termchat-key-watcher",
            daemon=True,
        )
        self._watcher.start()
        logger.debug("event_source_started", tick_seconds=self._tick_seconds)

    async def close(self) -> None:
        """Stop both producers. Pending events are discarded."""
        if self._closed:
            return
        self._closed = True
        self._stop.set()
        if self._tick_task is not None:
            self._tick_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._tick_task
        if self._watcher is not None and self._watcher.is_alive():
            await asyncio.to_thread(self._watcher.join, self._poll_interval * 4)
        logger.debug("event_source_closed")

    async def next(self) -> Event:
        """Wait for the next event.

        Raises:
            RuntimeError: If the source was never started or is closed
            Exception: Whatever the key reader raised, re-raised here
        """
        if self._closed or not self.started:
            raise RuntimeError("event source is not running")
        item = await self._queue.get()
        if isinstance(item, _WatcherFailed):
            raise item.error
        return item

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self._tick_seconds)
            self._queue.put_nowait(Tick())

    def _watch_keys(self, loop: asyncio.AbstractEventLoop) -> None:
        """Key watcher thread body."""
        try:
            while not self._stop.is_set():
                for pressed in self._reader.read_keys(self._poll_interval):
                    loop.call_soon_threadsafe(self._queue.put_nowait, KeyPress(pressed))
                    if self._exit_key is not None and pressed == self._exit_key:
                        logger.info("key_watcher_exit_key", key=pressed)
                        return
        except Exception as e:
            if not self._stop.is_set():
                logger.error("key_watcher_failed", error=str(e))
                loop.call_soon_threadsafe(self._queue.put_nowait, _WatcherFailed(e))

    async def __aenter__(self) -> "EventSource":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __aiter__(self) -> "EventSource":
        return self

    async def __anext__(self) -> Event:
        if self._closed:
            raise StopAsyncIteration
        return await self.next()
