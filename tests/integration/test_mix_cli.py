"""Integration tests for the mix command."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from trackmix.cli import main
from trackmix.cli.exit_codes import ExitCode
from trackmix.errors import ToolExitError

pytestmark = pytest.mark.integration


def _write_outputs(tool_name, tool_path, args, **kwargs):
    Path(args[args.index("-o") + 1]).write_bytes(b"mkv")


def _mix(service, *args):
    return CliRunner().invoke(main, ["mix", *args], obj={"service": service})


@pytest.fixture
def mock_mkvmerge():
    with patch("trackmix.executor.remux.run_tool") as mock_run_tool:
        mock_run_tool.side_effect = _write_outputs
        yield mock_run_tool


class TestMixCommand:
    """Tests for `trackmix mix`."""

    def test_select_options(self, mock_mkvmerge, service, source_files, temp_dir):
        output = temp_dir / "out" / "episode01"

        result = CliRunner().invoke(
            main,
            [
                "mix",
                "-o", str(output),
                "-s", "video", str(source_files["video"]), "0",
                "-s", "audio", str(source_files["audio"]), "1=en,2",
                "-s", "subtitle", str(source_files["subtitle"]), "0",
            ],
            obj={"service": service},
        )  # fmt: skip

        assert result.exit_code == 0, result.output
        final = output.with_suffix(".mkv")
        assert f"Created {final}" in result.output
        assert final.exists()
        assert mock_mkvmerge.call_count == 4

        audio_args = mock_mkvmerge.call_args_list[1].args[2]
        assert audio_args[audio_args.index("--audio-tracks") + 1] == "1,2"
        languages = [
            audio_args[i + 1] for i, a in enumerate(audio_args) if a == "--language"
        ]
        assert languages == ["1:en", "2:ja"]

    def test_from_file(self, mock_mkvmerge, service, source_files, temp_dir):
        selection_file = temp_dir / "mix.yaml"
        selection_file.write_text(
            "selections:\n"
            f"  - path: {source_files['video']}\n"
            "    kind: video\n"
            "    track_ids: [0]\n"
            f"  - path: {source_files['subtitle']}\n"
            "    kind: subtitle\n"
            "    track_ids: [0]\n"
            "    track_langs: {0: zh-Hant}\n"
        )

        output = str(temp_dir / "final.mkv")
        result = _mix(service, "-o", output, "--from-file", str(selection_file))

        assert result.exit_code == 0, result.output
        subtitle_args = mock_mkvmerge.call_args_list[1].args[2]
        assert subtitle_args[subtitle_args.index("--language") + 1] == "0:zh-Hant"

    def test_no_selections(self, mock_mkvmerge, service, temp_dir):
        result = _mix(service, "-o", str(temp_dir / "x.mkv"))

        assert result.exit_code == ExitCode.INVALID_SELECTION
        assert "No tracks provided" in result.output
        mock_mkvmerge.assert_not_called()

    def test_missing_video(self, mock_mkvmerge, service, source_files, temp_dir):
        audio = str(source_files["audio"])
        result = _mix(service, "-o", str(temp_dir / "x"), "-s", "audio", audio, "1")

        assert result.exit_code == ExitCode.INVALID_SELECTION
        assert "video track" in result.output

    def test_missing_source(self, mock_mkvmerge, service, temp_dir):
        missing = str(temp_dir / "nope.mkv")
        result = _mix(service, "-o", str(temp_dir / "x"), "-s", "video", missing, "0")

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "does not exist" in result.output

    def test_conflicting_sources(self, mock_mkvmerge, service, source_files, temp_dir):
        other = temp_dir / "other.mkv"
        other.touch()

        result = CliRunner().invoke(
            main,
            [
                "mix",
                "-o", str(temp_dir / "x"),
                "-s", "video", str(source_files["video"]), "0",
                "-s", "video", str(other), "0",
            ],
            obj={"service": service},
        )  # fmt: skip

        assert result.exit_code == ExitCode.INVALID_SELECTION
        assert "Only one source file" in result.output

    def test_bad_track_spec(self, mock_mkvmerge, service, source_files, temp_dir):
        video = str(source_files["video"])
        result = _mix(service, "-o", str(temp_dir / "x"), "-s", "video", video, "0=")

        assert result.exit_code == ExitCode.INVALID_SELECTION

    def test_mkvmerge_failure(self, service, source_files, temp_dir):
        with patch("trackmix.executor.remux.run_tool") as mock_run_tool:
            mock_run_tool.side_effect = ToolExitError(
                "mkvmerge",
                2,
                stdout="Error: unsupported codec",
                command_line="mkvmerge -o video.mkv",
            )
            video = str(source_files["video"])
            result = _mix(service, "-o", str(temp_dir / "x"), "-s", "video", video, "0")

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "mkvmerge failed (code 2)" in result.output
        assert "Command: mkvmerge -o video.mkv" in result.output
