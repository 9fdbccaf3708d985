"""Integration tests for the inspect command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from trackmix.cli import main
from trackmix.cli.exit_codes import ExitCode
from trackmix.core.subprocess_utils import CommandResult
from trackmix.errors import ToolExitError

pytestmark = pytest.mark.integration


def _ok(data: dict) -> CommandResult:
    return CommandResult(stdout=json.dumps(data), stderr="", returncode=0)


class TestInspectCommand:
    """Tests for `trackmix inspect`."""

    def test_file_not_found(self, service, temp_dir: Path):
        result = CliRunner().invoke(
            main, ["inspect", str(temp_dir / "missing.mkv")], obj={"service": service}
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "File not found" in result.output

    @patch("trackmix.introspector.mkvmerge.run_tool")
    def test_human_output_mkv(
        self, mock_run_tool, service, source_files, bd_remux_fixture
    ):
        mock_run_tool.return_value = _ok(bd_remux_fixture)

        result = CliRunner().invoke(
            main,
            ["inspect", str(source_files["video"])],
            obj={"service": service},
        )

        assert result.exit_code == 0, result.output
        assert "Analyzer: mkvmerge" in result.output
        assert "Container: Matroska" in result.output
        assert "Size: 5.00 GB" in result.output
        assert "  Video:" in result.output
        assert "  Subtitles:" in result.output
        assert '"Commentary"' in result.output
        # One probe per kind
        assert mock_run_tool.call_count == 3

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_json_single_kind(
        self, mock_run_tool, service, temp_dir: Path, mp4_two_audio_fixture
    ):
        media = temp_dir / "episode.mp4"
        media.touch()
        mock_run_tool.return_value = _ok(mp4_two_audio_fixture)

        result = CliRunner().invoke(
            main,
            ["inspect", str(media), "--kind", "AUDIO", "--format", "json"],
            obj={"service": service},
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["backend"] == "ffprobe"
        assert list(data["tracks"]) == ["audio"]
        assert [t["trackId"] for t in data["tracks"]["audio"]] == ["1", "2"]
        assert data["tracks"]["audio"][1]["trackName"] == "English Dub"

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_tool_failure(self, mock_run_tool, service, temp_dir: Path):
        media = temp_dir / "broken.mp4"
        media.touch()
        mock_run_tool.side_effect = ToolExitError(
            "ffprobe", 1, stderr="Invalid data found when processing input"
        )

        result = CliRunner().invoke(
            main, ["inspect", str(media)], obj={"service": service}
        )

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Could not inspect file" in result.output
        assert "Invalid data found" in result.output

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_unparseable_report(self, mock_run_tool, service, temp_dir: Path):
        media = temp_dir / "odd.avi"
        media.touch()
        mock_run_tool.return_value = CommandResult("garbage", "", 0)

        result = CliRunner().invoke(
            main, ["inspect", str(media), "-k", "video"], obj={"service": service}
        )

        assert result.exit_code == ExitCode.PARSE_ERROR
