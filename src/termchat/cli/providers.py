"""Provider factory functions for CLI.

Centralizes creation of the chat transport from configuration.
Hides backend-specific arguments from command implementations.
"""

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from ..config import CompleteConfig
from ..transport import ChatTransport, create_transport

# Default console for output
_console = Console()


def transport_options(config: CompleteConfig) -> dict[str, Any]:
    """Backend-specific keyword arguments for the configured transport."""
    if config.connection.transport == "loopback":
        return {
            "echo_author": config.connection.echo_author,
            "date_format": config.frontend.date_format,
        }
    return {}


def get_transport(config: CompleteConfig, console: Console | None = None) -> ChatTransport:
    """Create the configured chat transport.

    Raises:
        SystemExit: If the transport backend is unknown
    """
    con = console or _console
    try:
        return create_transport(config.connection.transport, **transport_options(config))
    except ValueError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
