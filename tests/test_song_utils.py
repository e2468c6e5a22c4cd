"""Tests for display formatting helpers."""

from bcradio.song_utils import format_time, sanitize_tag, song_format, track_line
from tests.conftest import make_track


def test_format_time():
    assert format_time(0) == "0:00"
    assert format_time(9.9) == "0:09"
    assert format_time(61) == "1:01"
    assert format_time(3600) == "60:00"
    assert format_time(float("nan")) == "0:00"
    assert format_time(-5) == "0:00"


def test_sanitize_tag():
    assert sanitize_tag("line\nbreak") == "linebreak"
    long_value = sanitize_tag("x" * 150)
    assert len(long_value) == 100
    assert long_value.endswith("…")


def test_song_format():
    assert song_format(make_track("Song", artist="Band")) == "Band - Song"
    assert song_format(make_track("Song", artist="")) == "Song"


def test_track_line_markers():
    track = make_track("Song", artist="Band")
    track.is_skipped = True
    track.is_favorite = True

    assert track_line(0, track) == "1. Band - Song [skipped] [favorite]"
