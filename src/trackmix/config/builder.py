"""Layering configuration sources into a TrackmixConfig.

A ConfigSource is a flat bag of optional values from one place (config
file, environment, command line). ConfigBuilder applies sources in order
and then constructs the config sections, leaving anything no source set
at the section's own default.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from trackmix.config.env import EnvReader
from trackmix.config.models import (
    LoggingConfig,
    MixConfig,
    ProbeConfig,
    ToolPathsConfig,
    TrackmixConfig,
)


@dataclass
class ConfigSource:
    """Values supplied by one configuration source.

    None means the source does not set the value.
    """

    ffprobe_path: Path | None = None
    mkvmerge_path: Path | None = None
    resource_dir: Path | None = None
    dev_tools_dir: Path | None = None
    dev_mode: bool | None = None
    search_path: bool | None = None

    probe_timeout_seconds: int | None = None

    mix_temp_directory: Path | None = None
    mix_timeout_seconds: int | None = None
    mix_parallel_stages: bool | None = None

    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


# section -> (model, {model field: ConfigSource field})
_SECTIONS: dict[str, tuple[type, dict[str, str]]] = {
    "tools": (
        ToolPathsConfig,
        {
            "ffprobe": "ffprobe_path",
            "mkvmerge": "mkvmerge_path",
            "resource_dir": "resource_dir",
            "dev_tools_dir": "dev_tools_dir",
            "dev_mode": "dev_mode",
            "search_path": "search_path",
        },
    ),
    "probe": (ProbeConfig, {"timeout_seconds": "probe_timeout_seconds"}),
    "mix": (
        MixConfig,
        {
            "temp_directory": "mix_temp_directory",
            "timeout_seconds": "mix_timeout_seconds",
            "parallel_stages": "mix_parallel_stages",
        },
    ),
    "logging": (
        LoggingConfig,
        {
            "level": "logging_level",
            "file": "logging_file",
            "format": "logging_format",
            "include_stderr": "logging_include_stderr",
            "max_bytes": "logging_max_bytes",
            "backup_count": "logging_backup_count",
        },
    ),
}

_PATH_FIELDS = frozenset(
    {
        "ffprobe_path",
        "mkvmerge_path",
        "resource_dir",
        "dev_tools_dir",
        "mix_temp_directory",
        "logging_file",
    }
)


class ConfigBuilder:
    """Accumulates ConfigSources; the most recently applied value wins.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(data), source_name="file")
        builder.apply(source_from_env(EnvReader()), source_name="env")
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._origin: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Record every value source sets, replacing earlier ones."""
        for f in fields(source):
            value = getattr(source, f.name)
            if value is None:
                continue
            self._values[f.name] = value
            self._origin[f.name] = source_name

    def source_of(self, key: str) -> str:
        """Name the source that set key, or "default" when none did."""
        return self._origin.get(key, "default")

    def build(self) -> TrackmixConfig:
        """Construct the config.

        Raises:
            ValueError: If a section rejects one of the collected values.
        """
        sections = {}
        for section, (model, mapping) in _SECTIONS.items():
            kwargs = {
                attr: self._values[key]
                for attr, key in mapping.items()
                if key in self._values
            }
            sections[section] = model(**kwargs)
        return TrackmixConfig(**sections)


def _as_path(value: Any) -> Path | None:
    return Path(str(value)).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Turn parsed config.toml contents into a ConfigSource.

    Unknown sections and keys are ignored. Empty path strings count as
    unset.
    """
    values: dict[str, Any] = {}
    for section, (_, mapping) in _SECTIONS.items():
        table = file_config.get(section) or {}
        for attr, key in mapping.items():
            if attr not in table:
                continue
            raw = table[attr]
            values[key] = _as_path(raw) if key in _PATH_FIELDS else raw
    return ConfigSource(**values)


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Read TRACKMIX_* environment variables into a ConfigSource."""
    return ConfigSource(
        ffprobe_path=reader.get_path("TRACKMIX_FFPROBE_PATH"),
        mkvmerge_path=reader.get_path("TRACKMIX_MKVMERGE_PATH"),
        resource_dir=reader.get_path("TRACKMIX_RESOURCE_DIR"),
        dev_tools_dir=reader.get_path("TRACKMIX_DEV_TOOLS_DIR"),
        dev_mode=reader.get_bool("TRACKMIX_DEV_MODE"),
        search_path=reader.get_bool("TRACKMIX_SEARCH_PATH"),
        probe_timeout_seconds=reader.get_int("TRACKMIX_PROBE_TIMEOUT"),
        mix_temp_directory=reader.get_path("TRACKMIX_TEMP_DIR", must_exist=True),
        mix_timeout_seconds=reader.get_int("TRACKMIX_MIX_TIMEOUT"),
        mix_parallel_stages=reader.get_bool("TRACKMIX_PARALLEL_STAGES"),
        logging_level=reader.get_str("TRACKMIX_LOG_LEVEL"),
        logging_file=reader.get_path("TRACKMIX_LOG_FILE"),
        logging_format=reader.get_str("TRACKMIX_LOG_FORMAT"),
    )
