"""Console utilities for CLI commands.

* A ``ConsoleManager`` context manager yielding a pre-configured
  :class:`rich.console.Console`.
* Opt-out via the ``--no-rich`` flag (sets env var ``SKIPSYNC_NO_RICH``) or
  the environment variable being set externally.
* ``ConsoleNotifier`` routes resolver notifications to the console.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console

from skipsync.core.hooks import Notifier

__all__ = ["console", "ConsoleManager", "ConsoleNotifier", "rich_enabled"]

# ENV VAR used to disable rich output entirely (useful for piping or testing)
_ENV_DISABLE_RICH = "SKIPSYNC_NO_RICH"

console: Console = Console()


def rich_enabled() -> bool:
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Context manager that yields a configured Rich :class:`Console`.

    Parameters
    ----------
    record:
        Forwarded to :class:`rich.console.Console` so output can be exported
        with ``console.export_text``.
    force_use:
        When *True* / *False* this overrides autodetection and forces rich
        enabled/disabled. When *None*, autodetect via ``SKIPSYNC_NO_RICH``.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:
        enabled = self._force_use if self._force_use is not None else rich_enabled()
        if enabled:
            self.console = Console(record=self._record, **self._console_kwargs)
        else:
            # Plain output: no colour codes, no terminal control sequences.
            self.console = Console(
                record=self._record,
                color_system=None,
                force_terminal=False,
                **self._console_kwargs,
            )
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()
        # Propagate exceptions – we do *not* swallow them.
        return False


class ConsoleNotifier(Notifier):
    """Show resolver notifications on a Rich console."""

    def __init__(self, target: Console | None = None) -> None:
        self.console = target or console

    def show(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")
