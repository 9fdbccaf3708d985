"""Public operations of trackmix.

MediaTrackService bundles configuration, the tool locator, the track probe
and the remux executor into one explicit context object. Build it once and
pass it around; the module-level functions use a lazily created default
instance built from get_config().
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from trackmix.config.loader import get_config, get_temp_root
from trackmix.config.models import TrackmixConfig
from trackmix.core.formatting import format_file_size
from trackmix.domain.models import MixSelection, TrackProbeResult
from trackmix.errors import FilesystemError
from trackmix.executor.remux import RemuxExecutor
from trackmix.introspector.probe import TrackProbe
from trackmix.mixing.planner import plan_mix
from trackmix.tools.locator import ToolLocator

logger = logging.getLogger(__name__)


class MediaTrackService:
    """Entry point for probing and mixing media tracks.

    Example:
        service = MediaTrackService.from_config()
        audio = service.probe_tracks("episode.mkv", "audio")
        final = service.mix_tracks(
            [
                MixSelection("episode.mkv", "video", ["0"]),
                MixSelection("dub.mka", "audio", ["0"], {"0": "en"}),
            ],
            "out/episode",
        )
    """

    def __init__(
        self,
        config: TrackmixConfig,
        locator: ToolLocator | None = None,
        temp_root: Path | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Effective configuration.
            locator: Tool locator. Built from config.tools if None.
            temp_root: Root for per-mix temp directories. Derived from
                config if None.
        """
        self.config = config
        self.locator = locator or ToolLocator(config.tools)
        self.probe = TrackProbe(self.locator, timeout=config.probe.timeout_seconds)
        self.executor = RemuxExecutor(
            self.locator,
            temp_root=temp_root or get_temp_root(config),
            timeout=config.mix.timeout_seconds,
            parallel_stages=config.mix.parallel_stages,
        )

    @classmethod
    def from_config(cls, config: TrackmixConfig | None = None) -> MediaTrackService:
        """Build a service from the given or the loaded configuration."""
        return cls(config or get_config())

    def probe_tracks(self, path: Path | str, kind: str) -> TrackProbeResult:
        """List the tracks of one kind inside a media file.

        Raises:
            ToolNotFoundError: If the analyzer cannot be located.
            ToolError: If the analyzer cannot be run or fails.
            OutputParseError: If the analyzer's report cannot be decoded.
        """
        return self.probe.probe(path, kind)

    def file_size(self, path: Path | str) -> str:
        """Return the human-readable size of a file.

        Raises:
            FilesystemError: If the file cannot be stat'ed.
        """
        return file_size(path)

    def mix_tracks(
        self,
        selections: Iterable[MixSelection],
        output_path: Path | str,
    ) -> Path:
        """Combine selected tracks from one or more files into one output.

        Args:
            selections: Raw track selections; at least one video track is
                required.
            output_path: Requested output file.

        Returns:
            The final output path.

        Raises:
            InputValidationError: If the selections are rejected.
            ToolError: If mkvmerge cannot be located, run, or fails.
            FilesystemError: If a needed directory cannot be created.
        """
        plan = plan_mix(selections)
        return self.executor.execute(plan, output_path)


def file_size(path: Path | str) -> str:
    """Return the human-readable size of a file, from its filesystem metadata.

    Raises:
        FilesystemError: If the file cannot be stat'ed.
    """
    try:
        size = Path(path).stat().st_size
    except OSError as e:
        raise FilesystemError(f"Failed to read file size: {e}", path) from e
    return format_file_size(size)


# Default service used by the module-level functions
_default_service: MediaTrackService | None = None
_default_service_lock = threading.Lock()


def get_default_service() -> MediaTrackService:
    """Return the shared default service, creating it on first use."""
    global _default_service
    if _default_service is not None:
        return _default_service
    with _default_service_lock:
        if _default_service is None:
            _default_service = MediaTrackService.from_config()
        return _default_service


def reset_default_service() -> None:
    """Forget the shared default service. Primarily useful for testing."""
    global _default_service
    with _default_service_lock:
        _default_service = None


def probe_tracks(path: Path | str, kind: str) -> TrackProbeResult:
    """List the tracks of one kind inside a media file (default service)."""
    return get_default_service().probe_tracks(path, kind)


def mix_tracks(selections: Iterable[MixSelection], output_path: Path | str) -> Path:
    """Combine selected tracks into one output (default service)."""
    return get_default_service().mix_tracks(selections, output_path)
