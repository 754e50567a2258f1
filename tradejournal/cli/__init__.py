"""CLI commands for Trade Journal.

This package provides the command-line interface for Trade Journal,
including trade logging, session management, settings and AI helpers.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
