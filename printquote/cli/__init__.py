"""Command-line interface for printquote."""

from printquote.cli.app import app, main

__all__ = ["app", "main"]
