"""Core utilities package.

This package contains pure formatting helpers and the subprocess wrapper
used for every external tool invocation.
"""

from trackmix.core.formatting import (
    format_file_size,
    format_optional_size,
    parse_size,
)
from trackmix.core.subprocess_utils import (
    CommandResult,
    format_arg,
    format_command_line,
    run_command,
    run_tool,
)

__all__ = [
    # formatting
    "format_file_size",
    "format_optional_size",
    "parse_size",
    # subprocess_utils
    "CommandResult",
    "format_arg",
    "format_command_line",
    "run_command",
    "run_tool",
]
