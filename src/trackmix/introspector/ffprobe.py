"""ffprobe-based implementation of the AnalyzerBackend protocol."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from trackmix.core.subprocess_utils import run_tool
from trackmix.domain.models import Track
from trackmix.errors import OutputParseError
from trackmix.introspector.parsers import parse_ffprobe_report
from trackmix.introspector.reports import FFprobeReport

logger = logging.getLogger(__name__)


def build_ffprobe_args(path: Path) -> list[str]:
    """Return the ffprobe arguments used to dump streams and format as JSON."""
    return [
        "-v",
        "error",
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
        str(path),
    ]


class FFprobeBackend:
    """Generic analyzer backend using ffprobe.

    Works on any container ffprobe understands.
    """

    name = "ffprobe"

    def __init__(self, tool_path: Path, timeout: float | None = None) -> None:
        """Initialize the backend.

        Args:
            tool_path: Resolved path to the ffprobe executable.
            timeout: Seconds to wait for ffprobe; None or 0 waits forever.
        """
        self._tool_path = tool_path
        self._timeout = timeout

    def list_tracks(self, path: Path, kind: str) -> list[Track]:
        """List the tracks of one kind inside a file.

        Args:
            path: Path to the media file.
            kind: Track kind to keep.

        Returns:
            Normalized tracks in stream order.

        Raises:
            ToolError: If ffprobe cannot be run or fails.
            OutputParseError: If the JSON report cannot be decoded.
        """
        report = self._run_ffprobe(path)
        return parse_ffprobe_report(report, kind)

    def _run_ffprobe(self, path: Path) -> FFprobeReport:
        result = run_tool(
            self.name,
            self._tool_path,
            build_ffprobe_args(path),
            timeout=self._timeout,
        )
        try:
            return FFprobeReport.model_validate(json.loads(result.stdout))
        except json.JSONDecodeError as e:
            raise OutputParseError(self.name, str(e)) from e
        except ValidationError as e:
            logger.debug(
                "ffprobe report failed validation",
                extra={"path": str(path), "errors": e.error_count()},
            )
            raise OutputParseError(self.name, str(e)) from e
