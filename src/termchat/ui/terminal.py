"""Exclusive terminal access for the UI loop.

Hides the terminal modes the loop needs and their guaranteed release:
- Raw input (no echo, no line buffering, no signal keys)
- Alternate screen with a hidden cursor
- Mouse capture
- Whole-frame redraws without intermediate states
"""

import termios

import structlog
from rich.console import Console, RenderableType
from rich.live import Live

from ..errors import TerminalError

logger = structlog.get_logger(__name__)

# Button tracking, drag tracking, SGR extended coordinates
MOUSE_CAPTURE_ON = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
MOUSE_CAPTURE_OFF = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"


def raw_input_mode(attrs: list) -> list:
    """Return termios attributes for raw input.

    Output post-processing stays on so rendered lines still return the
    carriage.
    """
    mode = list(attrs)
    mode[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    mode[2] |= termios.CS8
    mode[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    cc = list(mode[6])
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    mode[6] = cc
    return mode


class TerminalSession:
    """Context manager owning the terminal while the loop runs.

    Example:
        with TerminalSession(Console(), input_fd=sys.stdin.fileno()) as term:
            term.draw(renderable)
        # Terminal restored, also when the body raised
    """

    def __init__(
        self,
        console: Console | None = None,
        input_fd: int | None = None,
        mouse_capture: bool = True,
        alternate_screen: bool = True,
    ) -> None:
        """Initialize the session.

        Args:
            console: Rich console to draw on
            input_fd: Terminal to put in raw input mode. None leaves input alone.
            mouse_capture: Ask the terminal to report mouse events
            alternate_screen: Draw on the alternate screen
        """
        self._console = console or Console()
        self._input_fd = input_fd
        self._mouse_capture = mouse_capture
        self._alternate_screen = alternate_screen
        self._saved_attrs: list | None = None
        self._live: Live | None = None
        self._mouse_enabled = False
        self.frames_drawn = 0

    @property
    def console(self) -> Console:
        return self._console

    @property
    def size(self) -> tuple[int, int]:
        """Current (width, height) of the terminal."""
        width, height = self._console.size
        return width, height

    def __enter__(self) -> "TerminalSession":
        try:
            if self._input_fd is not None:
                self._saved_attrs = termios.tcgetattr(self._input_fd)
                termios.tcsetattr(
                    self._input_fd, termios.TCSAFLUSH, raw_input_mode(self._saved_attrs)
                )
            self._live = Live(
                console=self._console,
                screen=self._alternate_screen,
                auto_refresh=False,
                transient=True,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start()
            if self._mouse_capture and self._console.is_terminal:
                self._write_control(MOUSE_CAPTURE_ON)
                self._mouse_enabled = True
        except (termios.error, OSError) as e:
            self._restore()
            raise TerminalError(f"cannot take over the terminal: {e}") from e
        logger.debug("terminal_acquired", size=self.size)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._restore()
        logger.debug("terminal_released")

    def draw(self, renderable: RenderableType) -> None:
        """Replace the whole frame with renderable.

        Raises:
            TerminalError: If the frame could not be written
        """
        if self._live is None:
            raise TerminalError("terminal session is not active")
        try:
            self._live.update(renderable, refresh=True)
        except OSError as e:
            raise TerminalError(f"cannot draw frame: {e}") from e
        self.frames_drawn += 1

    def _write_control(self, sequence: str) -> None:
        self._console.file.write(sequence)
        self._console.file.flush()

    def _restore(self) -> None:
        """Undo every mode that was entered, in reverse order."""
        if self._mouse_enabled:
            self._mouse_enabled = False
            self._write_control(MOUSE_CAPTURE_OFF)
        if self._live is not None:
            live, self._live = self._live, None
            live.stop()
        if self._saved_attrs is not None:
            attrs, self._saved_attrs = self._saved_attrs, None
            termios.tcsetattr(self._input_fd, termios.TCSADRAIN, attrs)
