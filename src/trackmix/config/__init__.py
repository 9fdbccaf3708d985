"""trackmix configuration.

Settings come from four layers; a value set in a later layer replaces the
one before it:

    built-in defaults -> config.toml -> TRACKMIX_* variables -> CLI flags

Most callers only need get_config().
"""

from trackmix.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from trackmix.config.env import EnvReader
from trackmix.config.loader import (
    TomlParseError,
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    get_temp_root,
    load_config_file,
    load_toml_file,
)
from trackmix.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from trackmix.config.models import (
    LoggingConfig,
    MixConfig,
    ProbeConfig,
    ToolPathsConfig,
    TrackmixConfig,
)

__all__ = [
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "LoggingConfig",
    "MixConfig",
    "ProbeConfig",
    "TomlParseError",
    "ToolPathsConfig",
    "TrackmixConfig",
    "build_logging_config",
    "clear_config_cache",
    "configure_logging_from_cli",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "get_temp_root",
    "load_config_file",
    "load_toml_file",
    "source_from_env",
    "source_from_file",
]
