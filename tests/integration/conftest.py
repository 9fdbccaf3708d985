"""Fixtures for CLI integration tests."""

from pathlib import Path
from unittest.mock import patch

import pytest

from trackmix.config.models import TrackmixConfig
from trackmix.service import MediaTrackService


@pytest.fixture(autouse=True)
def _skip_logging_setup():
    """Keep CLI invocations from replacing the root logger's handlers."""
    with patch("trackmix.cli._configure_logging"):
        yield


@pytest.fixture
def service(fake_locator, temp_dir: Path) -> MediaTrackService:
    """Service whose tools resolve to the fake tools directory."""
    return MediaTrackService(
        TrackmixConfig(), locator=fake_locator, temp_root=temp_dir / "mix-temp"
    )
