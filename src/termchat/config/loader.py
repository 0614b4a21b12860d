"""Configuration loading.

Hides where configuration comes from: a TOML file, environment variables
(optionally from a .env file), and built-in defaults, in that order of
increasing precedence for the environment.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import structlog
from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigError
from .models import CompleteConfig

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "termchat" / "config.toml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "TERMCHAT_USERNAME": ("connection", "username"),
    "TERMCHAT_TRANSPORT": ("connection", "transport"),
    "TERMCHAT_TICK_DELAY": ("terminal", "tick_delay"),
}


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a TOML configuration file into a plain dict.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path} is not valid TOML: {e}") from e


def apply_env_overrides(data: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Return a copy of data with TERMCHAT_* environment overrides applied."""
    env = os.environ if environ is None else environ
    merged = {section: dict(values) for section, values in data.items() if isinstance(values, dict)}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            merged.setdefault(section, {})[key] = value
    return merged


def load_config(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> CompleteConfig:
    """Load and validate the configuration snapshot.

    Args:
        path: TOML file to read. None falls back to DEFAULT_CONFIG_PATH when
            it exists, otherwise to built-in defaults.
        environ: Environment to read overrides from (defaults to os.environ
            after loading a .env file)

    Returns:
        Frozen CompleteConfig

    Raises:
        ConfigError: If the file is unreadable or any value is invalid
    """
    if environ is None:
        load_dotenv()

    data: dict[str, Any] = {}
    if path is not None:
        data = read_config_file(path)
    elif DEFAULT_CONFIG_PATH.exists():
        path = DEFAULT_CONFIG_PATH
        data = read_config_file(path)

    data = apply_env_overrides(data, environ)

    try:
        config = CompleteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e

    logger.debug("config_loaded", path=str(path) if path else None)
    return config
