"""External tool location for trackmix.

Resolves the ffprobe and mkvmerge executables from configured paths,
packaged resources, a development directory or PATH.
"""

from trackmix.tools.locator import (
    DEFAULT_RESOURCE_DIR,
    TOOL_NAMES,
    ToolLocator,
    ToolResolution,
    executable_names,
)

__all__ = [
    "DEFAULT_RESOURCE_DIR",
    "TOOL_NAMES",
    "ToolLocator",
    "ToolResolution",
    "executable_names",
]
