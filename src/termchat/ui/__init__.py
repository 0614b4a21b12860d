"""Terminal UI module for termchat.

Provides the tick-driven render/input loop of the chat client.

Module structure (Parnas principle - each module hides a design decision):
- models.py: Data structures (messages, UI state, app context)
- keys.py: Keyboard decoding (bytes to key names)
- events.py: Event merging (timer ticks and key presses)
- inbox.py: Incoming message buffering
- input_handler.py: Key dispatch (state machine and input editing)
- formatting.py: Text helpers (timestamps, alignment, wrapping)
- themes.py: Color palette
- widgets.py: Screen layouts (chat table, input line, keybind help)
- terminal.py: Terminal ownership (raw mode, alternate screen, mouse)
- app.py: Application orchestration (the main loop)
"""

from .app import ChatTerminalApp, run_chat_tui
from .events import EventSource, KeyPress, Tick
from .inbox import MessageInbox
from .input_handler import DispatchResult, dispatch_key
from .keys import KeyReader, TerminalKeyReader
from .models import AppContext, ChatMessage, ColumnConstraint, UiState
from .terminal import TerminalSession

__all__ = [
    "AppContext",
    "ChatMessage",
    "ChatTerminalApp",
    "ColumnConstraint",
    "DispatchResult",
    "EventSource",
    "KeyPress",
    "KeyReader",
    "MessageInbox",
    "TerminalKeyReader",
    "TerminalSession",
    "Tick",
    "UiState",
    "dispatch_key",
    "run_chat_tui",
]
