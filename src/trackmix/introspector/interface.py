"""AnalyzerBackend interface for track discovery."""

from pathlib import Path
from typing import Protocol

from trackmix.domain.models import Track


class AnalyzerBackend(Protocol):
    """Protocol for analyzer backends.

    A backend runs one external analyzer against a file and normalizes its
    report into Track objects. Implementations exist for ffprobe (any
    container) and ``mkvmerge -J`` (Matroska family only).
    """

    name: str

    def list_tracks(self, path: Path, kind: str) -> list[Track]:
        """List the tracks of one kind inside a file.

        Args:
            path: Path to the media file.
            kind: Track kind to keep (video, audio, subtitle).

        Returns:
            Normalized tracks in the analyzer's order.

        Raises:
            ToolSpawnError: If the analyzer cannot be started.
            ToolTimeoutError: If the analyzer exceeds its deadline.
            ToolExitError: If the analyzer exits non-zero.
            OutputParseError: If the analyzer's report cannot be decoded.
        """
        ...
