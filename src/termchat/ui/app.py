"""Main TUI loop.

Orchestrates the UI components: each iteration drains at most one incoming
message, redraws once, waits for the next event and dispatches it.
"""

import asyncio
import contextlib
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console

from ..config.models import CompleteConfig
from ..errors import TransportError
from .events import Event, EventSource, KeyPress, Tick
from .inbox import MessageInbox
from .input_handler import dispatch_key
from .keys import KeyReader, TerminalKeyReader
from .models import AppContext
from .terminal import TerminalSession
from .widgets import initialize_columns, render_frame

if TYPE_CHECKING:
    from ..transport import ChatTransport

logger = structlog.get_logger(__name__)

# Seconds to let queued outgoing lines reach the transport after quitting
SEND_DRAIN_TIMEOUT = 1.0


class ChatTerminalApp:
    """The render/input loop.

    Only this object's task mutates the context, so nothing is locked.
    """

    def __init__(
        self,
        config: CompleteConfig,
        events: EventSource,
        terminal: TerminalSession,
        inbox: MessageInbox | None = None,
        outbound: asyncio.Queue[str] | None = None,
    ) -> None:
        self.config = config
        self.context = AppContext(maximum_messages=config.terminal.maximum_messages)
        self.inbox = inbox if inbox is not None else MessageInbox()
        self.outbound: asyncio.Queue[str] = outbound if outbound is not None else asyncio.Queue()
        self._events = events
        self._terminal = terminal

    def drain_inbox(self) -> None:
        """Move at most one incoming message to the front of the history."""
        message = self.inbox.try_drain_one()
        if message is not None:
            self.context.push_message(message)

    def render(self) -> None:
        width, height = self._terminal.size
        self._terminal.draw(render_frame(self.context, self.config, width, height))

    def handle_event(self, event: Event) -> bool:
        """Dispatch one event. Returns False when the loop must stop."""
        match event:
            case Tick():
                return True
            case KeyPress(key=key):
                result = dispatch_key(self.context, key, self.config)
                if result.outgoing is not None:
                    self.outbound.put_nowait(result.outgoing)
                return not result.quit
        return True

    async def run(self) -> None:
        """Run until Esc is pressed in Normal state.

        Terminal and event source are released on every exit path;
        terminal errors propagate.
        """
        initialize_columns(self.context, self.config)
        logger.info("ui_loop_started", state=self.context.state.value)

        with self._terminal:
            async with self._events:
                while True:
                    self.drain_inbox()
                    self.render()
                    event = await self._events.next()
                    if not self.handle_event(event):
                        break

        logger.info("ui_loop_finished", messages=len(self.context.message_history))


async def send_outgoing(transport: "ChatTransport", outbound: asyncio.Queue[str]) -> None:
    """Forward queued lines to the transport.

    Failed sends are logged; the local echo already in history stays.
    """
    while True:
        text = await outbound.get()
        try:
            await transport.send(text)
        except TransportError as e:
            logger.warning("send_failed", error=str(e), length=len(text))
        finally:
            outbound.task_done()


async def run_chat_tui(
    config: CompleteConfig,
    transport: "ChatTransport",
    console: Console | None = None,
    key_reader: KeyReader | None = None,
    input_fd: int | None = None,
) -> AppContext:
    """Connect the transport and run the chat loop on the terminal.

    Args:
        config: Configuration snapshot
        transport: Network collaborator for sending and receiving
        console: Rich console to draw on (defaults to stdout)
        key_reader: Key source (defaults to reading stdin)
        input_fd: Terminal put in raw mode (defaults to stdin when
            key_reader is not given)

    Returns:
        The final AppContext
    """
    if key_reader is None:
        input_fd = sys.stdin.fileno() if input_fd is None else input_fd
        key_reader = TerminalKeyReader(input_fd)

    app = ChatTerminalApp(
        config,
        events=EventSource.from_config(config.terminal, key_reader),
        terminal=TerminalSession(console, input_fd=input_fd),
    )

    async with transport:
        receiver = asyncio.create_task(app.inbox.feed(transport.receive()))
        sender = asyncio.create_task(send_outgoing(transport, app.outbound))
        try:
            await app.run()
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(app.outbound.join(), SEND_DRAIN_TIMEOUT)
        finally:
            for task in (sender, receiver):
                task.cancel()
            await asyncio.gather(sender, receiver, return_exceptions=True)

    return app.context
