"""Command-line interface for skipsync.

- app: The Typer application object (entry point ``skipsync``).
- console: Rich Console instance for consistent, styled output.
"""

from skipsync.cli.commands import app
from skipsync.cli.console import console

__all__ = ["app", "console"]
