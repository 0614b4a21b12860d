"""
Termchat: a terminal chat client driven by a tick-based render and input loop.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .config import CompleteConfig, load_config
from .transport import ChatTransport, create_transport
from .ui import ChatMessage, ChatTerminalApp, run_chat_tui

__all__ = [
    "ChatMessage",
    "ChatTerminalApp",
    "ChatTransport",
    "CompleteConfig",
    "create_transport",
    "load_config",
    "run_chat_tui",
]
