"""Integration tests for the size and tools commands and global options."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from trackmix.cli import main
from trackmix.cli.exit_codes import ExitCode, exit_code_for
from trackmix.config.models import ToolPathsConfig, TrackmixConfig
from trackmix.errors import (
    ConflictingSourceError,
    FilesystemError,
    OutputParseError,
    SelectionFileError,
    SourceMissingError,
    ToolExitError,
    ToolNotFoundError,
    TrackmixError,
)
from trackmix.service import MediaTrackService
from trackmix.tools.locator import ToolLocator

pytestmark = pytest.mark.integration


class TestSizeCommand:
    """Tests for `trackmix size`."""

    def test_prints_size(self, service, temp_dir: Path):
        path = temp_dir / "clip.mkv"
        path.write_bytes(b"\0" * 2048)

        result = CliRunner().invoke(main, ["size", str(path)], obj={"service": service})

        assert result.exit_code == 0
        assert result.output.strip() == "2.00 KB"

    def test_missing_file(self, service, temp_dir: Path):
        result = CliRunner().invoke(
            main, ["size", str(temp_dir / "nope")], obj={"service": service}
        )
        assert result.exit_code == ExitCode.TARGET_NOT_FOUND


class TestToolsCommand:
    """Tests for `trackmix tools`."""

    def test_all_found(self, service, fake_tools_dir: Path):
        result = CliRunner().invoke(main, ["tools"], obj={"service": service})

        assert result.exit_code == 0
        assert f"ffprobe: {fake_tools_dir / 'ffprobe'}" in result.output
        assert f"mkvmerge: {fake_tools_dir / 'mkvmerge'}" in result.output

    def test_missing_tool(self, temp_dir: Path):
        bin_dir = temp_dir / "partial"
        bin_dir.mkdir()
        (bin_dir / "ffprobe").touch()
        locator = ToolLocator(
            ToolPathsConfig(resource_dir=bin_dir, search_path=False),
            platform_system="Linux",
        )
        svc = MediaTrackService(TrackmixConfig(), locator=locator, temp_root=temp_dir)

        result = CliRunner().invoke(main, ["tools"], obj={"service": svc})

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "mkvmerge: not found" in result.output
        assert "Required tool not found: mkvmerge" in result.output


class TestGlobalOptions:
    """Tests for options handled by the main group."""

    def test_invalid_config_file(self, temp_dir: Path):
        config = temp_dir / "config.toml"
        config.write_text("[mix\n")
        path = temp_dir / "clip.mkv"
        path.touch()

        result = CliRunner().invoke(main, ["--config", str(config), "size", str(path)])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Invalid configuration" in result.output

    def test_tool_overrides_reach_locator(self, temp_dir: Path, fake_tools_dir: Path):
        custom = temp_dir / "custom-mkvmerge"
        custom.touch()

        with patch.dict("os.environ", {"TRACKMIX_DATA_DIR": str(temp_dir)}):
            result = CliRunner().invoke(
                main,
                [
                    "--config", str(temp_dir / "absent.toml"),
                    "--mkvmerge", str(custom),
                    "--ffprobe", str(fake_tools_dir / "ffprobe"),
                    "tools",
                ],
            )  # fmt: skip

        assert result.exit_code == 0, result.output
        assert f"mkvmerge: {custom}" in result.output


class TestExitCodeFor:
    """Tests for exit_code_for mapping."""

    def test_mapping(self):
        missing_tool = ToolNotFoundError("mkvmerge")
        assert exit_code_for(missing_tool) == ExitCode.TOOL_NOT_AVAILABLE
        assert exit_code_for(SourceMissingError("/x")) == ExitCode.TARGET_NOT_FOUND
        assert (
            exit_code_for(ConflictingSourceError("video", "/a", "/b"))
            == ExitCode.INVALID_SELECTION
        )
        assert exit_code_for(SelectionFileError("bad")) == ExitCode.INVALID_SELECTION
        assert exit_code_for(OutputParseError("ffprobe", "x")) == ExitCode.PARSE_ERROR
        assert exit_code_for(ToolExitError("mkvmerge", 1)) == ExitCode.OPERATION_FAILED
        assert exit_code_for(FilesystemError("disk")) == ExitCode.OPERATION_FAILED
        assert exit_code_for(TrackmixError("other")) == ExitCode.GENERAL_ERROR
