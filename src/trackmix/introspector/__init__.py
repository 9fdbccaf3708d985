"""Introspector module for trackmix.

This module provides track discovery:

- TrackProbe: Chooses a backend per file and returns normalized tracks
- AnalyzerBackend: Protocol implemented by each analyzer
- FFprobeBackend: Generic backend using ffprobe
- MkvmergeBackend: Matroska backend using mkvmerge -J

Formatters for probe results:
- format_human: Human-readable output
- format_json: JSON output
- format_track_line: Format a single track for display
"""

from trackmix.introspector.ffprobe import FFprobeBackend
from trackmix.introspector.formatters import (
    format_human,
    format_json,
    format_track_line,
)
from trackmix.introspector.interface import AnalyzerBackend
from trackmix.introspector.mkvmerge import MkvmergeBackend
from trackmix.introspector.probe import (
    MATROSKA_EXTENSIONS,
    TrackProbe,
    select_backend_name,
)

__all__ = [
    "AnalyzerBackend",
    "FFprobeBackend",
    "MkvmergeBackend",
    "TrackProbe",
    "MATROSKA_EXTENSIONS",
    "select_backend_name",
    # Formatters
    "format_human",
    "format_json",
    "format_track_line",
]
