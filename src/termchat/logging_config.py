"""Logging setup for termchat.

Hides where log output goes. The terminal belongs to the UI while the chat
loop runs, so records are written to a file or discarded, never to stdout.
"""

import logging
from pathlib import Path

import structlog

LOG_FORMAT = "%(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_string(level_str: str) -> int:
    """Convert a level name to its numeric value. Returns INFO if invalid."""
    return _LEVELS.get(level_str.lower(), logging.INFO)


def configure_logging(
    level: str = "info",
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Minimum level name (debug, info, warning, error)
        log_file: File to append records to. None discards all records.
        json_output: Render records as JSON instead of key=value pairs
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if log_file is None:
        handler: logging.Handler = logging.NullHandler()
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level_from_string(level))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
