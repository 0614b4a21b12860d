"""Configuration module for termchat.

Provides the read-only configuration snapshot consumed by the UI loop.
"""

from .loader import DEFAULT_CONFIG_PATH, load_config
from .models import (
    CompleteConfig,
    ConnectionConfig,
    FrontendConfig,
    TerminalConfig,
    UsernameAlignment,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CompleteConfig",
    "ConnectionConfig",
    "FrontendConfig",
    "TerminalConfig",
    "UsernameAlignment",
    "load_config",
]
