"""Root logger setup for trackmix."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from trackmix.logging.context import MixContextFilter
from trackmix.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from trackmix.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(mix_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for a ``[logging] format`` value.

    The text format relies on MixContextFilter for ``mix_tag``.
    """
    if log_format.lower() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be opened."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        # Logging is not set up yet, so report straight to stderr
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Replace the root logger's handlers according to config.

    Records go to the configured log file. They also go to stderr when
    ``include_stderr`` is set, when no file is configured, or when the file
    cannot be opened.

    Args:
        config: Logging configuration.

    Returns:
        The handlers now installed on the root logger.
    """
    level = logging.getLevelName(config.level.upper())
    formatter = build_formatter(config.format)
    context_filter = MixContextFilter()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)
    return handlers
