"""Configuration models.

Hides the shape and validation rules of the configuration snapshot.
Every section is frozen: the snapshot is read-only once loaded.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UsernameAlignment(str, Enum):
    """Alignment of names inside the username column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TerminalConfig(BaseModel):
    """Loop cadence and history settings."""

    model_config = ConfigDict(frozen=True)

    tick_delay: int = Field(
        default=30,
        gt=0,
        description="Milliseconds between redraw ticks"
    )
    maximum_messages: int = Field(
        default=150,
        gt=0,
        description="Messages kept in history before the oldest are evicted"
    )
    exit_key: str | None = Field(
        default=None,
        description="Key that stops the key watcher. None disables it"
    )

    @field_validator("exit_key", mode="before")
    @classmethod
    def empty_exit_key_disables(cls, v: str | None) -> str | None:
        """TOML has no null, so an empty string means disabled."""
        if v == "":
            return None
        return v


class FrontendConfig(BaseModel):
    """How the chat table is laid out."""

    model_config = ConfigDict(frozen=True)

    date_shown: bool = Field(default=True, description="Show the Time column")
    date_format: str = Field(
        default="%a %b %e %T",
        min_length=1,
        description="strftime format for message timestamps"
    )
    username_alignment: UsernameAlignment = Field(
        default=UsernameAlignment.RIGHT,
        description="Alignment of the username column"
    )
    maximum_username_length: int = Field(
        default=26,
        ge=1,
        description="Fixed width of the username column"
    )
    input: bool = Field(default=True, description="Allow entering Input mode with 'i'")


class ConnectionConfig(BaseModel):
    """Identity and transport selection."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(
        default="termchat",
        min_length=1,
        description="Author name used for local echoes"
    )
    transport: str = Field(default="loopback", description="Chat transport backend")
    echo_author: str = Field(
        default="echo",
        description="Author of messages echoed back by the loopback transport"
    )


class CompleteConfig(BaseModel):
    """The full configuration snapshot shared by the UI components."""

    model_config = ConfigDict(frozen=True)

    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    frontend: FrontendConfig = Field(default_factory=FrontendConfig)
    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
