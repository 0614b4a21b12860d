"""Screen layouts for the TUI.

Hides how a frame is built from the context:
- Column titles and widths of the chat table (computed once)
- Which messages fit on screen and in what order
- The input line and its cursor
- The keybind help view

Every layout is a pure function returning a rich renderable; drawing it is
the terminal session's job.
"""

from rich import box
from rich.cells import cell_len
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config.models import CompleteConfig
from .formatting import align_text, format_timestamp, wrap_content
from .input_handler import KEYBINDS
from .models import AppContext, ChatMessage, ColumnConstraint, UiState
from .themes import (
    BORDER_STYLE,
    CONTENT_STYLE,
    HEADER_STYLE,
    INPUT_BORDER_STYLE,
    KEY_STYLE,
    TIMESTAMP_STYLE,
    TITLE_STYLE,
    author_style,
)

TIME_TITLE = "Time"
USERNAME_TITLE = "Username"
MESSAGE_TITLE = "Message content"

CURSOR = "▏"
INPUT_PROMPT = "> "

# Rows taken by the panel border and the table header
CHAT_CHROME_ROWS = 4
# Height of the input panel in Input state
INPUT_PANEL_ROWS = 3
# Columns taken by the panel border and padding
PANEL_CHROME_COLS = 4
# Cell padding on each table column; columns are also split by one blank cell
COLUMN_PADDING = 2


def build_columns(config: CompleteConfig) -> tuple[list[str], list[ColumnConstraint]]:
    """Compute chat table titles and width constraints from configuration."""
    frontend = config.frontend
    titles = [
        align_text(USERNAME_TITLE, frontend.username_alignment, frontend.maximum_username_length),
        MESSAGE_TITLE,
    ]
    constraints = [
        ColumnConstraint.length(frontend.maximum_username_length),
        ColumnConstraint.percentage(100),
    ]

    if frontend.date_shown:
        titles.insert(0, TIME_TITLE)
        constraints.insert(
            0,
            ColumnConstraint.length(cell_len(format_timestamp(frontend.date_format))),
        )

    return titles, constraints


def initialize_columns(context: AppContext, config: CompleteConfig) -> None:
    """Fill in column metadata. Runs once, before the first frame."""
    if context.column_titles is not None:
        return
    context.column_titles, context.column_constraints = build_columns(config)


def message_column_width(context: AppContext, width: int) -> int:
    """Width left for message contents after the fixed columns."""
    constraints = context.column_constraints or []
    fixed = sum(c.value for c in constraints if c.kind == "length")
    separators = max(len(constraints) - 1, 0)
    used = PANEL_CHROME_COLS + fixed + COLUMN_PADDING * len(constraints) + separators
    return max(width - used, 1)


def visible_messages(
    context: AppContext,
    available_rows: int,
    content_width: int,
) -> list[ChatMessage]:
    """Newest messages that fit in available_rows, oldest first.

    The newest message is always shown. When it alone is taller than the
    view, only its last lines are kept.
    """
    if available_rows < 1 or not context.message_history:
        return []

    visible: list[ChatMessage] = []
    rows_left = available_rows
    for message in context.message_history:
        lines = wrap_content(message.content, content_width)
        if len(lines) > rows_left:
            if not visible:
                tail = "\n".join(lines[-rows_left:])
                visible.append(message.model_copy(update={"content": tail}))
            break
        visible.append(message)
        rows_left -= len(lines)
    visible.reverse()
    return visible


def _message_row(message: ChatMessage, config: CompleteConfig) -> list[Text]:
    frontend = config.frontend
    row = [
        Text(
            align_text(message.author, frontend.username_alignment, frontend.maximum_username_length),
            style=author_style(message.author, message.is_remote),
        ),
        Text(message.content, style=CONTENT_STYLE),
    ]
    if frontend.date_shown:
        row.insert(0, Text(message.timestamp, style=TIMESTAMP_STYLE))
    return row


def render_input(context: AppContext, width: int) -> Panel:
    """Input panel showing the tail of the buffer and a cursor."""
    room = max(width - PANEL_CHROME_COLS - len(INPUT_PROMPT) - 1, 1)
    shown = context.input_buffer[-room:]
    line = Text.assemble((INPUT_PROMPT, KEY_STYLE), shown, (CURSOR, TITLE_STYLE))
    return Panel(
        line,
        title="Input",
        title_align="left",
        border_style=INPUT_BORDER_STYLE,
        height=INPUT_PANEL_ROWS,
    )


def render_chat(context: AppContext, config: CompleteConfig, width: int, height: int) -> RenderableType:
    """Chat view: the message table, plus the input line in Input state."""
    titles = context.column_titles or []
    constraints = context.column_constraints or []
    in_input = context.state is UiState.INPUT

    chat_height = max(height - (INPUT_PANEL_ROWS if in_input else 0), CHAT_CHROME_ROWS)
    rows = visible_messages(
        context,
        chat_height - CHAT_CHROME_ROWS,
        message_column_width(context, width),
    )

    table = Table(
        box=box.SIMPLE_HEAD,
        expand=True,
        show_edge=False,
        header_style=HEADER_STYLE,
        padding=(0, 1),
    )
    for title, constraint in zip(titles, constraints):
        if constraint.kind == "length":
            table.add_column(title, width=constraint.value, no_wrap=True, overflow="ellipsis")
        else:
            table.add_column(title, ratio=constraint.value, overflow="fold")
    for message in rows:
        table.add_row(*_message_row(message, config))

    chat = Panel(
        table,
        title="Chat",
        title_align="left",
        border_style=BORDER_STYLE,
        height=chat_height,
    )
    if not in_input:
        return chat
    return Group(chat, render_input(context, width))


def render_keybinds() -> Panel:
    """Static help view listing the keys and what they do."""
    table = Table(box=box.SIMPLE_HEAD, expand=True, show_edge=False, header_style=HEADER_STYLE)
    table.add_column("Key", no_wrap=True)
    table.add_column("Description", ratio=1)
    for key_name, description in KEYBINDS:
        table.add_row(Text(key_name, style=KEY_STYLE), Text(description, style=CONTENT_STYLE))
    return Panel(
        table,
        title="Keybinds",
        title_align="left",
        border_style=BORDER_STYLE,
        expand=True,
    )


def render_frame(context: AppContext, config: CompleteConfig, width: int, height: int) -> RenderableType:
    """Pick the layout for the current state."""
    match context.state:
        case UiState.NORMAL | UiState.INPUT:
            return render_chat(context, config, width, height)
        case UiState.KEYBIND_HELP:
            return render_keybinds()
