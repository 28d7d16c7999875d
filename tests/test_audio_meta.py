"""Tests for app.utils.audio_meta module."""

import pytest

from app.utils.audio_meta import content_type_for, file_extension


class TestFileExtension:
    """Tests for file_extension function."""

    def test_basic_extension(self):
        assert file_extension("test.wav") == ".wav"

    def test_lowercases(self):
        assert file_extension("TEST.WAV") == ".wav"

    def test_last_dot_wins(self):
        assert file_extension("archive.tar.gz") == ".gz"

    @pytest.mark.parametrize("filename", ["", None, "noext", "trailing."])
    def test_no_extension(self, filename):
        assert file_extension(filename) == ""

    def test_leading_dot_name(self):
        assert file_extension(".wav") == ".wav"

    def test_ignores_directories(self):
        assert file_extension("some.dir/file") == ""
        assert file_extension("C:\\uploads.d\\take1.flac") == ".flac"


class TestContentTypeFor:
    """Tests for content_type_for function."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("test.wav", "audio/wav"),
            ("test.mp3", "audio/mpeg"),
            ("test.flac", "audio/flac"),
            ("test.m4a", "audio/mp4"),
            ("test.aac", "audio/aac"),
            ("test.ogg", "audio/ogg"),
            ("test.unknown", "application/octet-stream"),
            ("noextension", "application/octet-stream"),
        ],
    )
    def test_mapping(self, filename, expected):
        assert content_type_for(filename) == expected

    def test_case_insensitive(self):
        assert content_type_for("ENHANCED.MP3") == "audio/mpeg"
