"""Command line interface for termchat."""

from .app import app

__all__ = ["app"]
