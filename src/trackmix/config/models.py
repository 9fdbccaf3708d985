"""Configuration sections for trackmix.

Each ``[section]`` of config.toml maps onto one dataclass here. Sections
validate themselves on construction and raise ValueError for bad values.
"""

from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")


def _check_timeout(section: str, seconds: int) -> None:
    if seconds < 0:
        raise ValueError(f"[{section}] timeout_seconds cannot be negative: {seconds}")


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> str:
    normalized = value.strip().lower()
    if normalized not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}; got {value!r}")
    return normalized


@dataclass
class ToolPathsConfig:
    """Where to find ffprobe and mkvmerge.

    An explicit path always wins. Without one, a tool is searched for in
    ``resource_dir``, then ``dev_tools_dir`` when ``dev_mode`` is on, then
    on PATH when ``search_path`` allows it.
    """

    ffprobe: Path | None = None
    mkvmerge: Path | None = None
    # None means the package's own bin/ directory
    resource_dir: Path | None = None
    dev_tools_dir: Path = field(default_factory=lambda: Path("tools"))
    dev_mode: bool = False
    search_path: bool = True

    def get_tool_path(self, tool_name: str) -> Path | None:
        """Return the explicit path configured for tool_name, if any."""
        return getattr(self, tool_name.lower(), None)


@dataclass
class ProbeConfig:
    """``[probe]`` settings."""

    # 0 disables the limit
    timeout_seconds: int = 60

    def __post_init__(self) -> None:
        _check_timeout("probe", self.timeout_seconds)


@dataclass
class MixConfig:
    """``[mix]`` settings for building the output file."""

    # None means <data dir>/mix-temp
    temp_directory: Path | None = None
    # Applies to each mkvmerge run; 0 disables the limit
    timeout_seconds: int = 1800
    parallel_stages: bool = False

    def __post_init__(self) -> None:
        _check_timeout("mix", self.timeout_seconds)


@dataclass
class LoggingConfig:
    """``[logging]`` settings.

    Without ``file`` records go to stderr. With a file they go there too
    only if ``include_stderr`` is set. The file rotates at ``max_bytes``,
    keeping ``backup_count`` old copies.
    """

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = False
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        self.level = _check_choice("level", self.level, LOG_LEVELS)
        self.format = _check_choice("format", self.format, LOG_FORMATS)


@dataclass
class TrackmixConfig:
    """All configuration sections together."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    mix: MixConfig = field(default_factory=MixConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
