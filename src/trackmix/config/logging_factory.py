"""Merging command-line logging flags into the configured LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from trackmix.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return a copy of base with every non-None override applied.

    Raises:
        ValueError: If an override fails LoggingConfig validation.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def configure_logging_from_cli(
    *,
    config_path: Path | None = None,
    level: str | None = None,
    file: Path | None = None,
    json_output: bool = False,
) -> LoggingConfig:
    """Set up logging for a CLI run and return the effective settings.

    The ``[logging]`` section of the config file (and TRACKMIX_LOG_*
    variables) supply the base; the CLI flags win.
    """
    from trackmix.config import get_config
    from trackmix.logging import configure_logging

    config = build_logging_config(
        get_config(config_path=config_path).logging,
        level=level,
        file=file,
        format="json" if json_output else None,
    )
    configure_logging(config)
    return config
