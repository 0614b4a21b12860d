"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import CompleteConfig, load_config
from ..errors import ConfigError, TermchatError
from ..logging_config import configure_logging
from ..ui.widgets import render_keybinds
from .providers import get_transport

# Create Typer app
app = typer.Typer(
    name="termchat",
    help="Terminal chat client with a tick-driven render and input loop",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _load(config_path: Path | None, username: str | None = None) -> CompleteConfig:
    """Load configuration, exiting with code 1 when it is invalid."""
    try:
        config = load_config(config_path)
        if username is not None:
            data = config.model_dump()
            data["connection"]["username"] = username
            try:
                config = CompleteConfig.model_validate(data)
            except ValidationError as e:
                raise ConfigError(str(e)) from e
        return config
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


@app.command(name="tui")
def tui_command(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="TOML configuration file"
    ),
    username: str | None = typer.Option(
        None,
        "--username",
        "-u",
        help="Name shown on your own messages"
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Append logs to this file (logs are discarded otherwise)"
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, or error"
    ),
):
    """Launch the interactive chat interface."""
    configure_logging(log_level, log_file)
    config = _load(config_path, username)
    transport = get_transport(config, console)

    async def _tui():
        from ..ui import run_chat_tui

        await run_chat_tui(config, transport)

    try:
        asyncio.run(_tui())
    except TermchatError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


@app.command(name="config")
def config_command(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="TOML configuration file"
    ),
):
    """Show the effective configuration."""
    config = _load(config_path)

    table = Table(title="Configuration")
    table.add_column("Section", style="cyan")
    table.add_column("Option", style="green")
    table.add_column("Value")

    for section, values in config.model_dump(mode="json").items():
        for option, value in values.items():
            table.add_row(section, option, "" if value is None else str(value))

    console.print(table)


@app.command(name="keys")
def keys_command():
    """Show the keybinds of the chat interface."""
    console.print(render_keybinds())


if __name__ == "__main__":
    app()
