"""mkvmerge-based implementation of the AnalyzerBackend protocol.

Uses the JSON identification mode (``mkvmerge -J``), which reports richer
Matroska metadata than ffprobe: IETF language tags, track names and the
stored default/forced flags.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from trackmix.core.subprocess_utils import run_tool
from trackmix.domain.models import Track
from trackmix.errors import OutputParseError
from trackmix.introspector.parsers import parse_mkvmerge_report
from trackmix.introspector.reports import MkvmergeReport

logger = logging.getLogger(__name__)


class MkvmergeBackend:
    """Matroska analyzer backend using ``mkvmerge -J``."""

    name = "mkvmerge"

    def __init__(self, tool_path: Path, timeout: float | None = None) -> None:
        self._tool_path = tool_path
        self._timeout = timeout

    def list_tracks(self, path: Path, kind: str) -> list[Track]:
        """List the tracks of one kind inside a Matroska file.

        Raises:
            ToolError: If mkvmerge cannot be run or fails.
            OutputParseError: If the identification report cannot be decoded.
        """
        result = run_tool(
            self.name,
            self._tool_path,
            ["-J", str(path)],
            timeout=self._timeout,
        )
        try:
            report = MkvmergeReport.model_validate(json.loads(result.stdout))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.debug(
                "mkvmerge identification could not be decoded",
                extra={"path": str(path)},
            )
            raise OutputParseError(self.name, str(e)) from e

        return parse_mkvmerge_report(report, kind)
