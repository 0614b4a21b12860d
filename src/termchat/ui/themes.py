"""Colour palette for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Which colour each chat author gets

To change the look, modify only this file.
"""

import zlib

from rich.style import Style

# Catppuccin Mocha
PALETTE = {
    "blue": "#89b4fa",
    "mauve": "#cba6f7",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "peach": "#fab387",
    "red": "#f38ba8",
    "teal": "#94e2d5",
    "sky": "#89dceb",
    "pink": "#f5c2e7",
    "lavender": "#b4befe",
    "text": "#cdd6f4",
    "subtext": "#a6adc8",
    "border": "#45475a",
}

# Colours handed out to remote authors
AUTHOR_COLORS = [
    "blue", "mauve", "yellow", "green", "peach",
    "red", "teal", "sky", "pink", "lavender",
]

BORDER_STYLE = Style(color=PALETTE["border"])
TITLE_STYLE = Style(color=PALETTE["yellow"], bold=True)
HEADER_STYLE = Style(color=PALETTE["blue"], bold=True)
TIMESTAMP_STYLE = Style(color=PALETTE["subtext"])
CONTENT_STYLE = Style(color=PALETTE["text"])
LOCAL_AUTHOR_STYLE = Style(color=PALETTE["text"], bold=True)
INPUT_BORDER_STYLE = Style(color=PALETTE["green"])
KEY_STYLE = Style(color=PALETTE["peach"], bold=True)


def author_style(author: str, is_remote: bool = True) -> Style:
    """Style for an author name.

    Remote authors get a colour that is stable across runs.
    """
    if not is_remote:
        return LOCAL_AUTHOR_STYLE
    index = zlib.crc32(author.encode("utf-8")) % len(AUTHOR_COLORS)
    return Style(color=PALETTE[AUTHOR_COLORS[index]])
