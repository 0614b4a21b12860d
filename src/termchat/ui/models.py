"""Data models for the TUI.

Hides the internal representation of chat messages, the interaction mode
and the mutable state the loop renders from.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A chat line shown in the message table."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(description="Timestamp already formatted for display")
    author: str = Field(description="Name of the sender")
    content: str = Field(description="Message text")
    is_remote: bool = Field(description="False for local echoes of our own input")


class UiState(str, Enum):
    """Interaction mode of the UI."""

    NORMAL = "normal"
    INPUT = "input"
    KEYBIND_HELP = "keybind_help"


@dataclass(frozen=True)
class ColumnConstraint:
    """Width rule for one table column."""

    kind: Literal["length", "percentage"]
    value: int

    @classmethod
    def length(cls, value: int) -> "ColumnConstraint":
        return cls("length", value)

    @classmethod
    def percentage(cls, value: int) -> "ColumnConstraint":
        return cls("percentage", value)


@dataclass
class AppContext:
    """Everything the render and input dispatchers read or change.

    message_history is newest-first; appending past maxlen drops the oldest.
    column_titles and column_constraints stay None until the one-time
    column initialization runs.
    """

    maximum_messages: int = 150
    state: UiState = UiState.NORMAL
    input_buffer: str = ""
    message_history: deque[ChatMessage] = field(init=False)
    column_titles: list[str] | None = None
    column_constraints: list[ColumnConstraint] | None = None

    def __post_init__(self) -> None:
        self.message_history = deque(maxlen=self.maximum_messages)

    def push_message(self, message: ChatMessage) -> None:
        """Insert a message at the front of the history."""
        self.message_history.appendleft(message)
