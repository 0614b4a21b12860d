"""Pytest configuration and shared fixtures."""
import io
import time

import pytest
from rich.console import Console

from termchat.config import CompleteConfig
from termchat.ui.keys import KeyReader


class ScriptedKeyReader(KeyReader):
    """Key reader that replays a fixed list of keys, one per poll."""

    def __init__(self, keys: list[str], delay: float = 0.0):
        self._keys = list(keys)
        self._delay = delay
        self.polls = 0

    @property
    def exhausted(self) -> bool:
        return not self._keys

    def read_keys(self, timeout: float) -> list[str]:
        self.polls += 1
        if self._keys:
            if self._delay:
                time.sleep(self._delay)
            return [self._keys.pop(0)]
        time.sleep(timeout)
        return []


class FailingKeyReader(KeyReader):
    """Key reader whose terminal has gone away."""

    def __init__(self, error: Exception):
        self._error = error

    def read_keys(self, timeout: float) -> list[str]:
        raise self._error


def make_config(**sections) -> CompleteConfig:
    """Build a config from partial section dicts, e.g. frontend={"input": False}."""
    return CompleteConfig.model_validate(sections)


@pytest.fixture
def config():
    """Default configuration with a fixed-width date format and fast ticks."""
    return make_config(
        terminal={"tick_delay": 10},
        frontend={"date_format": "%H:%M:%S"},
        connection={"username": "alice"},
    )


@pytest.fixture
def config_factory():
    """Return the make_config helper."""
    return make_config


@pytest.fixture
def scripted_reader():
    """Return the ScriptedKeyReader class."""
    return ScriptedKeyReader


@pytest.fixture
def failing_reader():
    """Return the FailingKeyReader class."""
    return FailingKeyReader


@pytest.fixture
def screen_console():
    """A terminal-like console drawing into a string buffer."""
    return Console(
        file=io.StringIO(),
        width=100,
        height=30,
        force_terminal=True,
        color_system="truecolor",
    )


@pytest.fixture
def record_console():
    """A plain console that records output for export_text()."""
    return Console(
        file=io.StringIO(),
        width=100,
        record=True,
        force_terminal=False,
        color_system=None,
    )
