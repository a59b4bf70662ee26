"""Logging helpers for skipsync.

Every record goes through one stderr handler on the ``skipsync`` logger, so
stdout carries only command output (``skipsync resolve --json`` stays
parseable). Modules either call the helpers below or log through
``logging.getLogger(__name__)``; child loggers propagate to the same handler.

Debug records are shown when SKIPSYNC_DEBUG is set to 1/true/yes. The variable
is read on every call, so it can be toggled without reloading the module.
"""

import logging
import os
import sys

LOGGER_NAME = "skipsync"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_TRUTHY = {"1", "true", "yes"}


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def debug_enabled() -> bool:
    return os.getenv("SKIPSYNC_DEBUG", "0").lower() in _TRUTHY


def get_logger() -> logging.Logger:
    """Return the package logger, attaching the stderr handler once."""
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, _StderrHandler) for h in logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    return logger


def debug(msg: str) -> None:
    get_logger().debug(msg)


def info(msg: str) -> None:
    get_logger().info(msg)


def warn(msg: str) -> None:
    get_logger().warning(msg)


def error(msg: str) -> None:
    get_logger().error(msg)
