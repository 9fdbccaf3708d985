"""Track probing with per-file backend selection.

Matroska-family files are inspected with ``mkvmerge -J``; every other file
goes through ffprobe.
"""

from __future__ import annotations

import logging
from pathlib import Path

from trackmix.domain.models import TrackProbeResult
from trackmix.introspector.ffprobe import FFprobeBackend
from trackmix.introspector.interface import AnalyzerBackend
from trackmix.introspector.mkvmerge import MkvmergeBackend
from trackmix.tools.locator import ToolLocator

logger = logging.getLogger(__name__)

# Extensions (lowercase, no dot) routed to mkvmerge
MATROSKA_EXTENSIONS = frozenset({"mkv", "mka", "mks"})

_BACKENDS: dict[str, type[FFprobeBackend] | type[MkvmergeBackend]] = {
    FFprobeBackend.name: FFprobeBackend,
    MkvmergeBackend.name: MkvmergeBackend,
}


def select_backend_name(path: Path | str) -> str:
    """Choose the analyzer for a file from its extension.

    Args:
        path: Path to the media file.

    Returns:
        "mkvmerge" for .mkv/.mka/.mks (any case), otherwise "ffprobe".
    """
    extension = Path(path).suffix.lstrip(".").lower()
    if extension in MATROSKA_EXTENSIONS:
        return MkvmergeBackend.name
    return FFprobeBackend.name


class TrackProbe:
    """Discover the tracks of one kind inside a media file.

    Example:
        probe = TrackProbe(ToolLocator(config.tools))
        result = probe.probe(Path("episode.mkv"), "audio")
        for track in result:
            print(track.id, track.language_name)
    """

    def __init__(self, locator: ToolLocator, timeout: float | None = None) -> None:
        """Initialize the probe.

        Args:
            locator: Locator used to resolve the analyzer executables.
            timeout: Seconds to wait for each analyzer call; None or 0
                waits forever.
        """
        self._locator = locator
        self._timeout = timeout

    def backend_for(self, path: Path) -> AnalyzerBackend:
        """Build the analyzer backend appropriate for a file.

        Raises:
            ToolNotFoundError: If the analyzer executable cannot be found.
        """
        name = select_backend_name(path)
        tool_path = self._locator.resolve(name)
        return _BACKENDS[name](tool_path, self._timeout)

    def probe(self, path: Path | str, kind: str) -> TrackProbeResult:
        """List the tracks of one kind inside a file.

        Args:
            path: Path to the media file.
            kind: Track kind (video, audio, subtitle); case-insensitive.

        Returns:
            TrackProbeResult with tracks in backend order. Unknown kinds
            simply produce no tracks.

        Raises:
            ToolNotFoundError: If the analyzer executable cannot be found.
            ToolError: If the analyzer cannot be run or fails.
            OutputParseError: If the analyzer's report cannot be decoded.
        """
        path = Path(path)
        kind = kind.lower()
        backend = self.backend_for(path)

        tracks = backend.list_tracks(path, kind)
        logger.info(
            "Probed %d %s track(s) in %s",
            len(tracks),
            kind,
            path.name,
            extra={"backend": backend.name, "path": str(path), "kind": kind},
        )
        return TrackProbeResult(
            file_path=path,
            kind=kind,
            backend=backend.name,
            tracks=tracks,
        )
