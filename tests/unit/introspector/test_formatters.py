"""Unit tests for introspector/formatters.py."""

import json
from pathlib import Path

from trackmix.domain.models import Track, TrackProbeResult
from trackmix.introspector.formatters import (
    format_human,
    format_json,
    format_track_line,
)


def _audio_result() -> TrackProbeResult:
    return TrackProbeResult(
        file_path=Path("/media/ep01.mkv"),
        kind="audio",
        backend="mkvmerge",
        tracks=[
            Track(
                id="1",
                kind="audio",
                codec="FLAC",
                language="ja",
                language_name="Japanese",
                is_default=True,
                is_forced=False,
                attributes="2ch 48000 Hz",
                container="Matroska",
                file_size="5.00 GB",
            ),
            Track(
                id="2",
                kind="audio",
                codec="AAC",
                language="tlh",
                label="Commentary",
                container="Matroska",
                file_size="5.00 GB",
            ),
        ],
    )


class TestFormatTrackLine:
    """Tests for format_track_line function."""

    def test_full_track(self):
        line = format_track_line(_audio_result().tracks[0])
        assert line == "#1 FLAC 2ch 48000 Hz ja (Japanese) (default)"

    def test_unmapped_language_and_label(self):
        line = format_track_line(_audio_result().tracks[1])
        assert line == '#2 AAC tlh "Commentary"'

    def test_subtitle_title_attribute_not_repeated(self):
        track = Track(
            id="3",
            kind="subtitle",
            codec="mov_text",
            label="Signs",
            attributes="Signs",
            charset="UTF-8",
            is_forced=True,
        )
        assert format_track_line(track) == '#3 mov_text "Signs" [UTF-8] (forced)'


class TestFormatHuman:
    """Tests for format_human function."""

    def test_header_and_tracks(self):
        empty_subs = TrackProbeResult(
            file_path=Path("/media/ep01.mkv"), kind="subtitle", backend="mkvmerge"
        )
        output = format_human([_audio_result(), empty_subs])

        assert "File: /media/ep01.mkv" in output
        assert "Container: Matroska" in output
        assert "Size: 5.00 GB" in output
        assert "Analyzer: mkvmerge" in output
        assert "  Audio:" in output
        assert "  Subtitles:" in output
        assert "    (none)" in output

    def test_no_results(self):
        assert format_human([]) == ""


class TestFormatJson:
    """Tests for format_json function."""

    def test_camel_case_tracks(self):
        data = json.loads(format_json([_audio_result()]))

        assert data["file"] == "/media/ep01.mkv"
        assert data["backend"] == "mkvmerge"
        first = data["tracks"]["audio"][0]
        assert first == {
            "trackId": "1",
            "codec": "FLAC",
            "lang": "ja",
            "languageName": "Japanese",
            "trackName": None,
            "isDefault": True,
            "isForced": False,
            "charset": None,
            "attributes": "2ch 48000 Hz",
            "container": "Matroska",
            "fileSize": "5.00 GB",
        }
