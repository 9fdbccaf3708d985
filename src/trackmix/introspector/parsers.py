"""Pure normalization functions for analyzer reports.

These functions transform decoded ffprobe and mkvmerge reports into
trackmix Track objects. All functions are pure (no I/O, no side effects)
for easy testing.
"""

from __future__ import annotations

import logging

from trackmix.core.formatting import format_file_size, format_optional_size
from trackmix.domain.models import Track
from trackmix.introspector.reports import (
    FFprobeReport,
    FFprobeStream,
    MkvmergeReport,
    MkvmergeTrack,
    MkvmergeTrackProperties,
)
from trackmix.language import language_display_name

logger = logging.getLogger(__name__)

# mkvmerge reports subtitle tracks as "subtitles"
_MKVMERGE_SUBTITLE_TYPES = frozenset({"subtitles", "subtitle"})


def _join_parts(parts: list[str]) -> str | None:
    return " ".join(parts) if parts else None


# =============================================================================
# ffprobe
# =============================================================================


def build_ffprobe_attributes(stream: FFprobeStream) -> str | None:
    """Build the one-line attribute summary for an ffprobe stream.

    Video streams give "WxH" and the frame rate (an unknown "0/0" rate is
    suppressed), audio streams give "<N>ch" and the channel layout. Any
    other stream falls back to its title tag.

    Args:
        stream: Decoded ffprobe stream.

    Returns:
        Space-joined summary, or None when nothing is known.
    """
    if stream.codec_type == "video":
        parts = []
        if stream.width is not None and stream.height is not None:
            parts.append(f"{stream.width}x{stream.height}")
        if stream.r_frame_rate and stream.r_frame_rate != "0/0":
            parts.append(stream.r_frame_rate)
        return _join_parts(parts)

    if stream.codec_type == "audio":
        parts = []
        if stream.channels is not None:
            parts.append(f"{stream.channels}ch")
        if stream.channel_layout:
            parts.append(stream.channel_layout)
        return _join_parts(parts)

    return stream.tags.title if stream.tags else None


def parse_ffprobe_stream(
    stream: FFprobeStream,
    container: str | None = None,
    file_size: str | None = None,
) -> Track:
    """Parse a single ffprobe stream into a Track."""
    tags = stream.tags
    language = tags.language if tags else None
    charset = (tags.charset or tags.encoding) if tags else None

    # Each flag stays None when ffprobe did not report it
    disposition = stream.disposition
    is_default = None
    is_forced = None
    if disposition is not None:
        if disposition.default is not None:
            is_default = disposition.default == 1
        if disposition.forced is not None:
            is_forced = disposition.forced == 1

    return Track(
        id=str(stream.index if stream.index is not None else 0),
        kind=stream.codec_type or "",
        codec=stream.codec_name or "unknown",
        language=language,
        language_name=language_display_name(language),
        label=tags.title if tags else None,
        is_default=is_default,
        is_forced=is_forced,
        charset=charset,
        attributes=build_ffprobe_attributes(stream),
        container=container,
        file_size=file_size,
    )


def parse_ffprobe_report(report: FFprobeReport, kind: str) -> list[Track]:
    """Extract the tracks of one kind from an ffprobe report.

    Args:
        report: Decoded ffprobe report.
        kind: Requested kind; matched case-insensitively against codec_type.

    Returns:
        Tracks in stream order. Empty if none match.
    """
    kind = kind.lower()
    container = report.format.format_name if report.format else None
    file_size = format_optional_size(report.format.size) if report.format else None

    return [
        parse_ffprobe_stream(stream, container, file_size)
        for stream in report.streams or []
        if stream.codec_type == kind
    ]


# =============================================================================
# mkvmerge -J
# =============================================================================


def mkvmerge_type_matches(track_type: str | None, kind: str) -> bool:
    """Return True if an mkvmerge track type belongs to the requested kind."""
    if kind == "subtitle":
        return track_type in _MKVMERGE_SUBTITLE_TYPES
    return track_type == kind


def build_mkvmerge_attributes(
    props: MkvmergeTrackProperties,
    kind: str,
) -> str | None:
    """Build the one-line attribute summary for an mkvmerge track.

    Video tracks report pixel dimensions as-is. Audio tracks give "<N>ch"
    and the sampling frequency rounded to whole hertz. Other kinds have no
    summary.
    """
    if kind == "video":
        return props.pixel_dimensions

    if kind == "audio":
        parts = []
        if props.audio_channels is not None:
            parts.append(f"{props.audio_channels}ch")
        if props.audio_sampling_frequency is not None:
            parts.append(f"{round(props.audio_sampling_frequency)} Hz")
        return _join_parts(parts)

    return None


def parse_mkvmerge_track(
    track: MkvmergeTrack,
    kind: str,
    container: str | None = None,
    file_size: str | None = None,
) -> Track:
    """Parse a single mkvmerge track into a Track."""
    props = track.properties or MkvmergeTrackProperties()
    language = props.language_ietf or props.language
    codec = props.codec_name or track.codec or props.codec_id or "unknown"

    return Track(
        id=str(track.id),
        kind=kind,
        codec=codec,
        language=language,
        language_name=language_display_name(language),
        label=props.track_name,
        is_default=props.default_track,
        is_forced=props.forced_track,
        charset=props.encoding,
        attributes=build_mkvmerge_attributes(props, kind),
        container=container,
        file_size=file_size,
    )


def parse_mkvmerge_report(report: MkvmergeReport, kind: str) -> list[Track]:
    """Extract the tracks of one kind from an ``mkvmerge -J`` report.

    Args:
        report: Decoded mkvmerge identification report.
        kind: Requested kind. "subtitle" also matches mkvmerge's
            "subtitles" type.

    Returns:
        Tracks in report order. Empty if none match.
    """
    kind = kind.lower()
    container = None
    file_size = None
    if report.container is not None:
        container = report.container.type
        props = report.container.properties
        if props is not None and props.file_size is not None:
            file_size = format_file_size(props.file_size)

    tracks = [
        parse_mkvmerge_track(track, kind, container, file_size)
        for track in report.tracks or []
        if mkvmerge_type_matches(track.type, kind)
    ]
    logger.debug(
        "Parsed mkvmerge report",
        extra={"kind": kind, "track_count": len(tracks), "container": container},
    )
    return tracks
