"""Text formatting utilities for the TUI.

Hides the details of timestamp formatting, column alignment and
wrapping of message contents to the table width.
"""

import io
from datetime import datetime

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from ..config.models import UsernameAlignment

# Only used to measure wrapping, never printed to
_MEASURE_CONSOLE = Console(file=io.StringIO())


def format_timestamp(date_format: str, when: datetime | None = None) -> str:
    """Format a local timestamp for display."""
    return (when or datetime.now()).strftime(date_format)


def align_text(text: str, alignment: UsernameAlignment | str, maximum_length: int) -> str:
    """Pad text so it sits left, centered or right in a column.

    Text wider than the column is returned unchanged.

    Raises:
        ValueError: If maximum_length is below 1
    """
    if maximum_length < 1:
        raise ValueError("maximum_length cannot be below 1")

    width = cell_len(text)
    if width > maximum_length:
        return text

    free = maximum_length - width
    match UsernameAlignment(alignment):
        case UsernameAlignment.RIGHT:
            return " " * free + text
        case UsernameAlignment.CENTER:
            left = free // 2
            return " " * left + text + " " * (free - left)
        case _:
            return text


def wrap_content(text: str, width: int) -> list[str]:
    """Split message content into the lines rich draws at width.

    Long words are folded, the same as the chat table's message column.
    """
    if width < 1:
        return [text]
    lines = Text(text).wrap(_MEASURE_CONSOLE, width, overflow="fold")
    return [line.plain.rstrip() for line in lines]
