"""Pydantic models for analyzer JSON reports.

These models decode the subset of ``ffprobe -print_format json`` and
``mkvmerge -J`` output that trackmix consumes. Unknown keys are ignored so
newer tool releases that add fields keep working; keys that are present
with the wrong type fail validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Report(BaseModel):
    """Base for report models: ignore unknown keys, never mutate."""

    model_config = ConfigDict(extra="ignore", frozen=True)


# =============================================================================
# ffprobe
# =============================================================================


class FFprobeTags(_Report):
    language: str | None = None
    title: str | None = None
    encoding: str | None = None
    charset: str | None = None


class FFprobeDisposition(_Report):
    default: int | None = None
    forced: int | None = None


class FFprobeStream(_Report):
    """One entry of the ffprobe ``streams`` array."""

    index: int | None = None
    codec_name: str | None = None
    codec_type: str | None = None
    width: int | None = None
    height: int | None = None
    r_frame_rate: str | None = None
    channels: int | None = None
    channel_layout: str | None = None
    disposition: FFprobeDisposition | None = None
    tags: FFprobeTags | None = None


class FFprobeFormat(_Report):
    format_name: str | None = None
    # ffprobe reports the size as a decimal string
    size: str | None = None


class FFprobeReport(_Report):
    """Top-level ffprobe report."""

    streams: list[FFprobeStream] | None = None
    format: FFprobeFormat | None = None


# =============================================================================
# mkvmerge -J
# =============================================================================


class MkvmergeTrackProperties(_Report):
    language: str | None = None
    language_ietf: str | None = None
    track_name: str | None = None
    default_track: bool | None = None
    forced_track: bool | None = None
    codec_name: str | None = None
    codec_id: str | None = None
    encoding: str | None = None
    pixel_dimensions: str | None = None
    audio_channels: int | None = None
    audio_sampling_frequency: float | None = None


class MkvmergeTrack(_Report):
    """One entry of the mkvmerge ``tracks`` array."""

    id: int
    type: str | None = None
    codec: str | None = None
    properties: MkvmergeTrackProperties | None = None


class MkvmergeContainerProperties(_Report):
    file_size: int | None = None


class MkvmergeContainer(_Report):
    type: str | None = None
    properties: MkvmergeContainerProperties | None = None


class MkvmergeReport(_Report):
    """Top-level ``mkvmerge -J`` report."""

    container: MkvmergeContainer | None = None
    tracks: list[MkvmergeTrack] | None = None
