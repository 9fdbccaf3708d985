"""Unit tests for TrackProbe and the analyzer backends.

The external tools are never executed: run_tool is patched per backend.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from trackmix.config.models import ToolPathsConfig
from trackmix.core.subprocess_utils import CommandResult
from trackmix.errors import OutputParseError, ToolExitError, ToolNotFoundError
from trackmix.introspector.ffprobe import FFprobeBackend, build_ffprobe_args
from trackmix.introspector.mkvmerge import MkvmergeBackend
from trackmix.introspector.probe import TrackProbe, select_backend_name
from trackmix.tools.locator import ToolLocator


def _ok(data) -> CommandResult:
    return CommandResult(stdout=json.dumps(data), stderr="", returncode=0)


class TestSelectBackendName:
    """Tests for extension-based backend selection."""

    @pytest.mark.parametrize(
        "path",
        ["a.mkv", "a.MKV", "b.mka", "c.Mks", "/x/y/episode.01.mkv"],
    )
    def test_matroska_uses_mkvmerge(self, path):
        assert select_backend_name(path) == "mkvmerge"

    @pytest.mark.parametrize(
        "path",
        ["a.mp4", "a.avi", "a.webm", "a.ass", "noext", "a.mkv.part"],
    )
    def test_everything_else_uses_ffprobe(self, path):
        assert select_backend_name(path) == "ffprobe"


class TestFFprobeBackend:
    """Tests for FFprobeBackend."""

    def test_args(self):
        assert build_ffprobe_args(Path("/m/a b.mp4")) == [
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            "/m/a b.mp4",
        ]

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_list_tracks(self, mock_run_tool, mp4_two_audio_fixture):
        mock_run_tool.return_value = _ok(mp4_two_audio_fixture)
        backend = FFprobeBackend(Path("/bin/ffprobe"), timeout=30)

        tracks = backend.list_tracks(Path("/m/a.mp4"), "audio")

        assert [t.id for t in tracks] == ["1", "2"]
        mock_run_tool.assert_called_once_with(
            "ffprobe",
            Path("/bin/ffprobe"),
            build_ffprobe_args(Path("/m/a.mp4")),
            timeout=30,
        )

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_invalid_json(self, mock_run_tool):
        mock_run_tool.return_value = CommandResult("not json", "", 0)
        backend = FFprobeBackend(Path("/bin/ffprobe"))

        with pytest.raises(OutputParseError) as exc_info:
            backend.list_tracks(Path("/m/a.mp4"), "video")

        assert "Failed to parse ffprobe output" in str(exc_info.value)

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_wrong_shape(self, mock_run_tool):
        """A report with a mistyped field fails validation."""
        mock_run_tool.return_value = _ok({"streams": "nope"})
        backend = FFprobeBackend(Path("/bin/ffprobe"))

        with pytest.raises(OutputParseError):
            backend.list_tracks(Path("/m/a.mp4"), "video")

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_tool_failure_propagates(self, mock_run_tool):
        mock_run_tool.side_effect = ToolExitError(
            "ffprobe", 1, stderr="moov atom not found"
        )
        backend = FFprobeBackend(Path("/bin/ffprobe"))

        with pytest.raises(ToolExitError) as exc_info:
            backend.list_tracks(Path("/m/a.mp4"), "video")

        assert exc_info.value.stderr == "moov atom not found"


class TestMkvmergeBackend:
    """Tests for MkvmergeBackend."""

    @patch("trackmix.introspector.mkvmerge.run_tool")
    def test_list_tracks(self, mock_run_tool, bd_remux_fixture):
        mock_run_tool.return_value = _ok(bd_remux_fixture)
        backend = MkvmergeBackend(Path("/bin/mkvmerge"))

        tracks = backend.list_tracks(Path("/m/a.mkv"), "subtitle")

        assert [t.id for t in tracks] == ["3", "4"]
        mock_run_tool.assert_called_once_with(
            "mkvmerge", Path("/bin/mkvmerge"), ["-J", "/m/a.mkv"], timeout=None
        )

    @patch("trackmix.introspector.mkvmerge.run_tool")
    def test_invalid_json(self, mock_run_tool):
        mock_run_tool.return_value = CommandResult("{", "", 0)
        backend = MkvmergeBackend(Path("/bin/mkvmerge"))

        with pytest.raises(OutputParseError) as exc_info:
            backend.list_tracks(Path("/m/a.mkv"), "video")

        assert exc_info.value.tool_name == "mkvmerge"


class TestTrackProbe:
    """Tests for TrackProbe."""

    @patch("trackmix.introspector.mkvmerge.run_tool")
    def test_probe_mkv(
        self, mock_run_tool, fake_locator, fake_tools_dir, bd_remux_fixture
    ):
        mock_run_tool.return_value = _ok(bd_remux_fixture)
        probe = TrackProbe(fake_locator, timeout=60)

        result = probe.probe("/m/Episode.MKV", "Audio")

        assert result.backend == "mkvmerge"
        assert result.kind == "audio"
        assert result.file_path == Path("/m/Episode.MKV")
        assert len(result) == 2
        assert result.container == "Matroska"
        assert result.file_size == "5.00 GB"
        assert mock_run_tool.call_args.args[1] == fake_tools_dir / "mkvmerge"
        assert mock_run_tool.call_args.kwargs["timeout"] == 60

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_probe_mp4(
        self, mock_run_tool, fake_locator, fake_tools_dir, mp4_two_audio_fixture
    ):
        mock_run_tool.return_value = _ok(mp4_two_audio_fixture)
        probe = TrackProbe(fake_locator)

        result = probe.probe(Path("/m/episode.mp4"), "video")

        assert result.backend == "ffprobe"
        assert [t.codec for t in result] == ["h264"]
        assert mock_run_tool.call_args.args[1] == fake_tools_dir / "ffprobe"

    @patch("trackmix.introspector.ffprobe.run_tool")
    def test_probe_no_matching_tracks(self, mock_run_tool, fake_locator):
        mock_run_tool.return_value = _ok({"streams": [], "format": {}})
        result = TrackProbe(fake_locator).probe("/m/a.mp4", "subtitle")

        assert len(result) == 0
        assert result.container is None
        assert result.file_size is None

    def test_missing_tool(self, temp_dir: Path):
        locator = ToolLocator(
            ToolPathsConfig(resource_dir=temp_dir, search_path=False),
            platform_system="Linux",
        )
        with pytest.raises(ToolNotFoundError) as exc_info:
            TrackProbe(locator).probe("/m/a.mkv", "video")

        assert exc_info.value.tool_name == "mkvmerge"
