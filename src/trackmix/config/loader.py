"""Loading the effective trackmix configuration.

Values are layered, later layers winning:

    defaults < config.toml < TRACKMIX_* environment < CLI flags

The config file lives at ``<data dir>/config.toml``; the data directory is
``~/.trackmix`` unless TRACKMIX_DATA_DIR says otherwise, and
TRACKMIX_CONFIG_PATH points at a different file directly.

Recognized environment variables:

================================  ==========================================
TRACKMIX_FFPROBE_PATH             ffprobe executable
TRACKMIX_MKVMERGE_PATH            mkvmerge executable
TRACKMIX_RESOURCE_DIR             packaged tool binaries
TRACKMIX_DEV_TOOLS_DIR            development tool binaries
TRACKMIX_DEV_MODE                 search the development tools directory
TRACKMIX_SEARCH_PATH              fall back to PATH when locating tools
TRACKMIX_PROBE_TIMEOUT            seconds per probe (0 = no limit)
TRACKMIX_MIX_TIMEOUT              seconds per mkvmerge run (0 = no limit)
TRACKMIX_TEMP_DIR                 root for per-mix temp directories
TRACKMIX_PARALLEL_STAGES          build intermediate files concurrently
TRACKMIX_LOG_LEVEL                debug, info, warning or error
TRACKMIX_LOG_FILE                 log file path
TRACKMIX_LOG_FORMAT               text or json
================================  ==========================================
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from trackmix.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from trackmix.config.env import EnvReader
from trackmix.config.models import TrackmixConfig

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".trackmix"
CONFIG_FILENAME = "config.toml"
MIX_TEMP_DIRNAME = "mix-temp"


class TomlParseError(Exception):
    """Raised when a config file exists but is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Parse a TOML file.

    A missing file is not an error and yields an empty dict. An unreadable
    or malformed file raises TomlParseError when strict, and otherwise is
    logged and treated as empty.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No config file at %s", path)
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        if strict:
            raise TomlParseError(path, str(e)) from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config file %s", path, extra={"sections": sorted(data)})
    return data


def _env_path(var: str) -> Path | None:
    value = os.environ.get(var)
    return Path(value).expanduser() if value else None


def get_data_dir() -> Path:
    """Return the data directory (TRACKMIX_DATA_DIR or ~/.trackmix)."""
    return _env_path("TRACKMIX_DATA_DIR") or DEFAULT_DATA_DIR


def get_default_config_path() -> Path:
    """Return the config file path (TRACKMIX_CONFIG_PATH or the data dir's)."""
    return _env_path("TRACKMIX_CONFIG_PATH") or get_data_dir() / CONFIG_FILENAME


def get_temp_root(config: TrackmixConfig | None = None) -> Path:
    """Return the directory holding per-mix temp directories.

    ``[mix] temp_directory`` when set, otherwise ``<data dir>/mix-temp``.
    """
    config = config or get_config()
    return config.mix.temp_directory or get_data_dir() / MIX_TEMP_DIRNAME


# Parsed config files keyed by path; an entry is reused while the file's
# mtime is unchanged (0.0 stands for "file absent")
_parsed_files: dict[Path, tuple[float, dict[str, Any]]] = {}
_parsed_files_lock = threading.Lock()


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Return the parsed config file, re-reading it only after it changes.

    Args:
        path: Config file. Defaults to get_default_config_path().
        strict: Raise TomlParseError instead of ignoring a bad file.

    Returns:
        Parsed TOML as a dict; empty if the file does not exist.
    """
    path = path or get_default_config_path()
    mtime = _mtime(path)

    with _parsed_files_lock:
        cached = _parsed_files.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]
        data = load_toml_file(path, strict=strict)
        _parsed_files[path] = (mtime, data)
        return data


def clear_config_cache() -> None:
    """Forget every parsed config file."""
    with _parsed_files_lock:
        _parsed_files.clear()


def get_config(
    config_path: Path | None = None,
    ffprobe_path: Path | None = None,
    mkvmerge_path: Path | None = None,
    temp_directory: Path | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> TrackmixConfig:
    """Build the effective configuration.

    Args:
        config_path: Config file to read instead of the default one.
        ffprobe_path: ``--ffprobe`` flag value.
        mkvmerge_path: ``--mkvmerge`` flag value.
        temp_directory: ``--temp-dir`` flag value.
        env_reader: Environment source; os.environ when None.
        strict: Fail on an unparseable config file instead of ignoring it.

    Raises:
        TomlParseError: If strict and the config file is not valid TOML.
        ValueError: If a merged value fails validation.
    """
    builder = ConfigBuilder()
    builder.apply(
        source_from_file(load_config_file(config_path, strict=strict)),
        source_name="file",
    )
    builder.apply(source_from_env(env_reader or EnvReader()), source_name="env")
    builder.apply(
        ConfigSource(
            ffprobe_path=ffprobe_path,
            mkvmerge_path=mkvmerge_path,
            mix_temp_directory=temp_directory,
        ),
        source_name="cli",
    )
    return builder.build()
