"""Domain models for trackmix.

These models describe probed tracks and mix requests independent of which
analyzer backend produced them. They are ephemeral: produced per call and
never persisted.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class TrackKind(str, Enum):
    """Coarse category of a track inside a container."""

    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"


# Fixed build order for the remux pipeline
KIND_ORDER: tuple[str, ...] = (
    TrackKind.VIDEO.value,
    TrackKind.AUDIO.value,
    TrackKind.SUBTITLE.value,
)


@dataclass
class Track:
    """One stream inside a container, normalized across analyzer backends."""

    id: str  # Backend-native identifier (mkvmerge track id or ffprobe index)
    kind: str
    codec: str = "unknown"
    language: str | None = None
    language_name: str | None = None
    label: str | None = None
    # None means the backend did not report the flag
    is_default: bool | None = None
    is_forced: bool | None = None
    charset: str | None = None
    attributes: str | None = None
    # Shared by every track of one probe call
    container: str | None = None
    file_size: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the track in its camelCase wire shape."""
        return {
            "trackId": self.id,
            "codec": self.codec,
            "lang": self.language,
            "languageName": self.language_name,
            "trackName": self.label,
            "isDefault": self.is_default,
            "isForced": self.is_forced,
            "charset": self.charset,
            "attributes": self.attributes,
            "container": self.container,
            "fileSize": self.file_size,
        }


@dataclass
class TrackProbeResult:
    """Ordered tracks of one kind found in one file."""

    file_path: Path
    kind: str
    backend: str  # "ffprobe" or "mkvmerge"
    tracks: list[Track] = field(default_factory=list)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def __len__(self) -> int:
        return len(self.tracks)

    @property
    def container(self) -> str | None:
        """Return the container format reported for the file, if any."""
        return self.tracks[0].container if self.tracks else None

    @property
    def file_size(self) -> str | None:
        """Return the human-readable file size reported for the file, if any."""
        return self.tracks[0].file_size if self.tracks else None


@dataclass
class MixSelection:
    """Raw caller selection of tracks of one kind from one source file."""

    source_path: str | Path
    kind: str
    track_ids: list[str] = field(default_factory=list)
    language_overrides: dict[str, str] = field(default_factory=dict)


@dataclass
class ConsolidatedSelection:
    """The single validated set of requested tracks for one kind."""

    source_path: Path
    kind: str
    track_ids: list[str] = field(default_factory=list)
    language_overrides: dict[str, str] = field(default_factory=dict)


@dataclass
class MixPlan:
    """Consolidated selections, at most one per kind."""

    video: ConsolidatedSelection | None = None
    audio: ConsolidatedSelection | None = None
    subtitle: ConsolidatedSelection | None = None

    def get(self, kind: str) -> ConsolidatedSelection | None:
        """Return the selection for a kind, or None if absent."""
        if kind not in KIND_ORDER:
            return None
        return getattr(self, kind)

    def selections(self) -> list[ConsolidatedSelection]:
        """Return present selections in video, audio, subtitle order."""
        return [sel for kind in KIND_ORDER if (sel := self.get(kind)) is not None]

    @property
    def kinds(self) -> list[str]:
        """Return the kinds present in this plan, in build order."""
        return [sel.kind for sel in self.selections()]


class RemuxState(Enum):
    """States of one remux pipeline run."""

    VALIDATING = "validating"
    BUILDING_VIDEO = "building_video"
    BUILDING_AUDIO = "building_audio"
    BUILDING_SUBTITLE = "building_subtitle"
    COMBINING = "combining"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"

    @classmethod
    def building(cls, kind: str) -> RemuxState:
        """Return the Stage 1 state for a kind."""
        return cls(f"building_{kind}")


@dataclass
class RemuxJob:
    """Transient bookkeeping for one mix call."""

    job_id: str
    temp_dir: Path
    output_path: Path
    # Registered only once the stage producing them has succeeded
    artifacts: dict[str, Path] = field(default_factory=dict)
    state: RemuxState = RemuxState.VALIDATING

    def ordered_artifacts(self) -> list[Path]:
        """Return existing artifacts in video, audio, subtitle order."""
        return [self.artifacts[kind] for kind in KIND_ORDER if kind in self.artifacts]
