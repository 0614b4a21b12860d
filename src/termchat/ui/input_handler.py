"""Key dispatch for the TUI state machine.

Hides how a key press changes the UI:
- Mode transitions between Normal, Input and KeybindHelp
- Editing of the input buffer
- Turning a submitted buffer into a local echo plus an outgoing line

Dispatch never waits. The caller hands DispatchResult.outgoing to the
transport and stops the loop when DispatchResult.quit is set.
"""

from dataclasses import dataclass

from ..config.models import CompleteConfig
from .formatting import format_timestamp
from .keys import BACKSPACE, ENTER, ESC
from .models import AppContext, ChatMessage, UiState

# Shown by the keybind help view, in order
KEYBINDS: list[tuple[str, str]] = [
    ("c", "Chat window"),
    ("i", "Insert mode"),
    ("?", "Bring up this window"),
    ("Esc", "Drop back to previous window layer; quits from the chat window"),
    ("Enter", "Send the message (insert mode)"),
    ("Backspace", "Delete the last character (insert mode)"),
]


@dataclass(frozen=True)
class DispatchResult:
    """What the loop must do after a key was handled."""

    quit: bool = False
    outgoing: str | None = None


CONTINUE = DispatchResult()


def dispatch_key(context: AppContext, key: str, config: CompleteConfig) -> DispatchResult:
    """Apply one key press to the context.

    Unknown keys leave the context unchanged.
    """
    if context.state is UiState.INPUT:
        return _dispatch_input(context, key, config)
    return _dispatch_command(context, key, config)


def _dispatch_command(context: AppContext, key: str, config: CompleteConfig) -> DispatchResult:
    """Keys in Normal and KeybindHelp."""
    match key:
        case "c":
            context.state = UiState.NORMAL
        case "?":
            context.state = UiState.KEYBIND_HELP
        case "i":
            if config.frontend.input:
                context.state = UiState.INPUT
        case _ if key == ESC:
            if context.state is UiState.NORMAL:
                return DispatchResult(quit=True)
            context.state = UiState.NORMAL
    return CONTINUE


def _dispatch_input(context: AppContext, key: str, config: CompleteConfig) -> DispatchResult:
    """Keys in Input."""
    if key == ENTER:
        return submit_input(context, config)
    if key == BACKSPACE:
        context.input_buffer = context.input_buffer[:-1]
    elif key == ESC:
        context.state = UiState.NORMAL
    elif len(key) == 1 and key.isprintable():
        context.input_buffer += key
    return CONTINUE


def submit_input(context: AppContext, config: CompleteConfig) -> DispatchResult:
    """Drain the input buffer into a local echo and an outgoing line.

    The echo is committed to history whatever happens to the send.
    """
    text = context.input_buffer
    context.input_buffer = ""
    context.push_message(
        ChatMessage(
            timestamp=format_timestamp(config.frontend.date_format),
            author=config.connection.username,
            content=text,
            is_remote=False,
        )
    )
    return DispatchResult(outgoing=text)
