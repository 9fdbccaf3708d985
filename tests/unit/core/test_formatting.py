"""Unit tests for core/formatting.py."""

import pytest

from trackmix.core.formatting import (
    format_file_size,
    format_optional_size,
    parse_size,
)


class TestFormatFileSize:
    """Tests for format_file_size function."""

    def test_zero_bytes(self):
        assert format_file_size(0) == "0 B"

    def test_bytes_are_integers(self):
        assert format_file_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_file_size(1024) == "1.00 KB"
        assert format_file_size(1536) == "1.50 KB"

    def test_megabytes(self):
        assert format_file_size(1048576) == "1.00 MB"

    def test_gigabytes(self):
        assert format_file_size(5368709120) == "5.00 GB"

    def test_terabytes(self):
        assert format_file_size(1024**4) == "1.00 TB"

    def test_caps_at_terabytes(self):
        """Values beyond TB stay in TB rather than growing a new unit."""
        assert format_file_size(1024**5) == "1024.00 TB"

    def test_rounds_to_two_decimals(self):
        assert format_file_size(734003200) == "700.00 MB"
        assert format_file_size(1024 * 1024 - 1) == "1024.00 KB"


class TestParseSize:
    """Tests for parse_size function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("734003200", 734003200),
            (42, 42),
            ("0", 0),
            (None, None),
            ("", None),
            ("12.5", None),
            ("-1", None),
            ("N/A", None),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_size(value) == expected

    def test_format_optional_size(self):
        assert format_optional_size("2048") == "2.00 KB"
        assert format_optional_size("garbage") is None
        assert format_optional_size(None) is None
