"""
Session logging configuration helpers.

This module owns logging setup for the autostart run, including
version-tagged formatting, optional file handler wiring and handler
teardown on exit.
"""

from __future__ import annotations

import logging

from autostarter import __version__
from autostarter.common.errors import AutostartError

__all__ = [
    "logging_setup",
    "logging_teardown",
    "logFormatWithVersion_get",
]


def logging_setup(level: str, log_format: str, log_file: str | None) -> list[logging.Handler]:
    """
    Attach stream (and optional file) handlers to the root logger.

    Args:
        level:
            Effective log level token (for example `INFO` or `DEBUG`).
        log_format:
            Base formatter string.
        log_file:
            Optional log file path.

    Returns:
        The handlers added, for logging_teardown().

    Raises:
        ValueError: If the level name is unknown.
        AutostartError: If the log file cannot be opened.
    """
    level_value = getattr(logging, level.upper(), None)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level '{level}'")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file))
        except OSError as e:
            raise AutostartError(f"Cannot open log file {log_file}: {e.strerror or e}") from e

    formatter = logging.Formatter(logFormatWithVersion_get(log_format))
    root = logging.getLogger()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level_value)
    return handlers


def logging_teardown(handlers: list[logging.Handler]) -> None:
    """
    Flush, detach and close handlers added by logging_setup().

    Args:
        handlers:
            Handlers returned by logging_setup().
    """
    root = logging.getLogger()
    for handler in handlers:
        root.removeHandler(handler)
        handler.flush()
        handler.close()


def logFormatWithVersion_get(log_format: str) -> str:
    """
    Inject runtime version tag into timestamped log format.

    Args:
        log_format:
            Base formatter string.

    Returns:
        Formatter string with embedded version token.
    """
    return log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]")
