"""Typed access to TRACKMIX_* environment variables.

EnvReader takes an optional mapping in place of os.environ, so loaders can
be tested with a plain dict.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


def parse_bool(value: str) -> bool:
    """Return True for "true", "1", "yes" or "on" (any case)."""
    return value.strip().lower() in TRUE_VALUES


class EnvReader:
    """Read environment variables with type conversion.

    Unset variables yield the caller's default. Values that fail to convert
    are logged and also yield the default.

    Example:
        reader = EnvReader(env={"TRACKMIX_MIX_TIMEOUT": "60"})
        reader.get_int("TRACKMIX_MIX_TIMEOUT", 1800)  # 60
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _convert(
        self,
        var: str,
        convert: Callable[[str], T],
        default: T | None,
    ) -> T | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return convert(raw)
        except ValueError:
            logger.warning(
                "Ignoring invalid value for %s: %r", var, raw, extra={"env_var": var}
            )
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        return self._convert(var, int, default)

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        return self._convert(var, parse_bool, default)

    def get_path(
        self, var: str, must_exist: bool = False, default: Path | None = None
    ) -> Path | None:
        """Get a user-expanded path.

        With must_exist, a path missing on disk is logged and replaced by
        the default.
        """
        raw = self._env.get(var)
        if raw is None:
            return default
        path = Path(raw).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "%s points to a missing path: %s", var, path, extra={"env_var": var}
            )
            return default
        return path
