"""Formatters for probe results.

This module renders TrackProbeResult objects for human-readable or JSON
output. The JSON form uses the camelCase track shape from Track.to_dict().
"""

import json
from collections.abc import Sequence

from trackmix.domain.models import Track, TrackProbeResult

_KIND_HEADINGS = {
    "video": "Video",
    "audio": "Audio",
    "subtitle": "Subtitles",
}


def format_human(results: Sequence[TrackProbeResult]) -> str:
    """Format probe results for one file as terminal output.

    Args:
        results: Probe results for the same file, one per requested kind.

    Returns:
        Formatted string for terminal output.
    """
    lines: list[str] = []
    if not results:
        return ""

    first = results[0]
    lines.append(f"File: {first.file_path}")
    container = next((r.container for r in results if r.container), None)
    if container:
        lines.append(f"Container: {container}")
    file_size = next((r.file_size for r in results if r.file_size), None)
    if file_size:
        lines.append(f"Size: {file_size}")
    lines.append(f"Analyzer: {first.backend}")
    lines.append("")

    lines.append("Tracks:")
    for result in results:
        lines.append(f"  {_KIND_HEADINGS.get(result.kind, result.kind.title())}:")
        if not result.tracks:
            lines.append("    (none)")
            continue
        for track in result:
            lines.append(f"    {format_track_line(track)}")

    return "\n".join(lines)


def format_track_line(track: Track) -> str:
    """Format a single track for human output.

    Args:
        track: The track to format.

    Returns:
        Formatted track line, e.g.
        ``#1 aac 2ch stereo jpn (Japanese) "Main" (default)``.
    """
    parts = [f"#{track.id}", track.codec]

    if track.attributes and track.attributes != track.label:
        parts.append(track.attributes)

    if track.language:
        if track.language_name:
            parts.append(f"{track.language} ({track.language_name})")
        else:
            parts.append(track.language)

    if track.label:
        parts.append(f'"{track.label}"')

    if track.charset:
        parts.append(f"[{track.charset}]")

    flags = []
    if track.is_default:
        flags.append("default")
    if track.is_forced:
        flags.append("forced")
    if flags:
        parts.append(f"({', '.join(flags)})")

    return " ".join(parts)


def format_json(results: Sequence[TrackProbeResult]) -> str:
    """Format probe results as JSON.

    Args:
        results: Probe results for the same file.

    Returns:
        JSON string keyed by kind.
    """
    data: dict = {
        "file": str(results[0].file_path) if results else None,
        "backend": results[0].backend if results else None,
        "tracks": {r.kind: [t.to_dict() for t in r] for r in results},
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
