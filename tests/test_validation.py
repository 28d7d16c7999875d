"""Tests for app.validation.FileValidator."""

import pytest

from app.config import DEFAULT_ALLOWED_EXTENSIONS, GatewaySettings
from app.validation import NO_FILE_MESSAGE, FileValidator
from gateway_test_utils import make_incoming_file


@pytest.fixture
def validator():
    return FileValidator.from_settings(GatewaySettings())


class TestMissingFile:
    """Absent and zero-byte files collapse to one message."""

    def test_none_file(self, validator):
        outcome = validator.validate(None)
        assert outcome.valid is False
        assert outcome.reason == NO_FILE_MESSAGE == "No audio file provided"

    def test_empty_file(self, validator):
        outcome = validator.validate(make_incoming_file(content=b""))
        assert outcome.valid is False
        assert outcome.reason == "No audio file provided"

    def test_empty_file_with_bad_extension_reports_missing_file(self, validator):
        """Rule 1 wins over the extension rule."""
        outcome = validator.validate(make_incoming_file(name="notes.txt", content=b""))
        assert outcome.reason == "No audio file provided"


class TestSupportedFormats:
    """Allowed extensions pass in any letter case."""

    @pytest.mark.parametrize("extension", DEFAULT_ALLOWED_EXTENSIONS)
    def test_supported_extension(self, validator, extension):
        outcome = validator.validate(make_incoming_file(name=f"test{extension}"))
        assert outcome.valid is True
        assert outcome.reason == ""

    @pytest.mark.parametrize("filename", ["test.WAV", "test.Mp3", "test.FLAC", "song.Ogg"])
    def test_uppercase_extension(self, validator, filename):
        assert validator.validate(make_incoming_file(name=filename)).valid is True

    def test_dotted_name_uses_last_extension(self, validator):
        assert validator.validate(make_incoming_file(name="my.track.v2.mp3")).valid is True


class TestUnsupportedFormats:
    """Extensions outside the allowed set are rejected by name."""

    @pytest.mark.parametrize("extension", [".txt", ".pdf", ".doc", ".jpg", ".zip"])
    def test_unsupported_extension(self, validator, extension):
        outcome = validator.validate(make_incoming_file(name=f"test{extension}"))
        assert outcome.valid is False
        assert "Unsupported file format" in outcome.reason
        assert extension in outcome.reason

    def test_message_lists_allowed_formats(self, validator):
        outcome = validator.validate(make_incoming_file(name="test.txt"))
        assert outcome.reason == (
            "Unsupported file format: .txt. "
            "Allowed formats: .wav, .mp3, .flac, .m4a, .aac, .ogg"
        )

    def test_uppercase_unsupported_extension_reported_lowercase(self, validator):
        outcome = validator.validate(make_incoming_file(name="IMAGE.JPG"))
        assert "Unsupported file format: .jpg." in outcome.reason

    def test_name_without_extension(self, validator):
        outcome = validator.validate(make_incoming_file(name="audiofile"))
        assert outcome.valid is False
        assert outcome.reason.startswith("Unsupported file format: .")

    def test_empty_name(self, validator):
        outcome = validator.validate(make_incoming_file(name=""))
        assert outcome.valid is False
        assert "Unsupported file format" in outcome.reason


class TestFileSize:
    """Size limit is inclusive and checked before the extension."""

    def test_size_exceeds_limit(self):
        validator = FileValidator(max_file_size_bytes=1000, allowed_extensions=(".wav",))
        outcome = validator.validate(make_incoming_file(size_bytes=1001))
        assert outcome.valid is False
        assert "File size" in outcome.reason
        assert "exceeds maximum allowed" in outcome.reason
        assert "1001" in outcome.reason
        assert "1000" in outcome.reason

    def test_size_at_limit_passes(self):
        validator = FileValidator(max_file_size_bytes=1000, allowed_extensions=(".wav",))
        assert validator.validate(make_incoming_file(size_bytes=1000)).valid is True

    def test_size_check_precedes_extension_check(self):
        validator = FileValidator(max_file_size_bytes=1000, allowed_extensions=(".wav",))
        outcome = validator.validate(make_incoming_file(name="test.txt", size_bytes=5000))
        assert "exceeds maximum allowed" in outcome.reason
        assert "Unsupported" not in outcome.reason

    def test_default_limit_is_100_mib(self, validator):
        limit = 100 * 1024 * 1024
        assert validator.validate(make_incoming_file(size_bytes=limit)).valid is True
        outcome = validator.validate(make_incoming_file(size_bytes=limit + 1))
        assert outcome.reason == (
            f"File size ({limit + 1} bytes) exceeds maximum allowed ({limit} bytes)"
        )


class TestConfiguredExtensions:
    """Validator honours a custom allowed set."""

    def test_custom_allowed_set(self):
        settings = GatewaySettings(allowed_extensions=("WAV", ".opus"))
        validator = FileValidator.from_settings(settings)
        assert validator.validate(make_incoming_file(name="a.opus")).valid is True
        assert validator.validate(make_incoming_file(name="a.wav")).valid is True
        outcome = validator.validate(make_incoming_file(name="a.mp3"))
        assert outcome.reason == "Unsupported file format: .mp3. Allowed formats: .wav, .opus"
