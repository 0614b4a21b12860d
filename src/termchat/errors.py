"""Exception hierarchy for termchat.

Hides which failures end the UI loop. TerminalError and ConfigError are
fatal; TransportError is logged and the loop carries on.
"""


class TermchatError(Exception):
    """Base class for termchat errors."""


class TerminalError(TermchatError):
    """Terminal setup or frame drawing failed."""

    def __init__(self, message: str):
        super().__init__(f"Terminal error: {message}")


class ConfigError(TermchatError):
    """Configuration file or value is invalid."""

    def __init__(self, message: str):
        super().__init__(f"Invalid configuration: {message}")


class TransportError(TermchatError):
    """Chat transport failed to connect or deliver."""

    def __init__(self, message: str, backend: str | None = None):
        msg = f"Transport error: {message}"
        if backend:
            msg += f" (backend: {backend})"
        super().__init__(msg)
        self.backend = backend
