"""Shared test fixtures for trackmix."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from trackmix.config.models import ToolPathsConfig
from trackmix.tools.locator import ToolLocator

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


def load_ffprobe_fixture(name: str) -> dict:
    """Load an ffprobe JSON fixture by name (without .json extension)."""
    fixture_path = FIXTURES_DIR / "ffprobe" / f"{name}.json"
    return json.loads(fixture_path.read_text())


def load_mkvmerge_fixture(name: str) -> dict:
    """Load an mkvmerge -J JSON fixture by name (without .json extension)."""
    fixture_path = FIXTURES_DIR / "mkvmerge" / f"{name}.json"
    return json.loads(fixture_path.read_text(encoding="utf-8"))


@pytest.fixture
def mp4_two_audio_fixture() -> dict:
    """ffprobe report: H.264 video, two audio tracks, one forced subtitle."""
    return load_ffprobe_fixture("mp4_two_audio")


@pytest.fixture
def missing_metadata_fixture() -> dict:
    """ffprobe report with missing indexes, tags and dispositions."""
    return load_ffprobe_fixture("missing_metadata")


@pytest.fixture
def bd_remux_fixture() -> dict:
    """mkvmerge report: BD remux with IETF tags and two subtitle tracks."""
    return load_mkvmerge_fixture("bd_remux")


@pytest.fixture
def minimal_mkvmerge_fixture() -> dict:
    """mkvmerge report with almost no track properties."""
    return load_mkvmerge_fixture("minimal")


@pytest.fixture
def fake_tools_dir(temp_dir: Path) -> Path:
    """Create a directory holding empty ffprobe and mkvmerge files."""
    bin_dir = temp_dir / "bin"
    bin_dir.mkdir()
    (bin_dir / "ffprobe").touch()
    (bin_dir / "mkvmerge").touch()
    return bin_dir


@pytest.fixture
def fake_locator(fake_tools_dir: Path) -> ToolLocator:
    """Locator that resolves tools from fake_tools_dir only."""
    config = ToolPathsConfig(resource_dir=fake_tools_dir, search_path=False)
    return ToolLocator(config, platform_system="Linux")


@pytest.fixture
def source_files(temp_dir: Path) -> dict[str, Path]:
    """Create empty source media files for mix tests."""
    sources = temp_dir / "sources"
    sources.mkdir()
    files = {
        "video": sources / "episode01.mkv",
        "audio": sources / "episode01.jpn.mka",
        "subtitle": sources / "episode01.chs.ass",
    }
    for path in files.values():
        path.touch()
    return files
