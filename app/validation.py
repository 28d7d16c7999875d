"""Audio Gateway - Upload acceptance rules.

Pure checks over file metadata (name, declared size). No I/O.
"""

from __future__ import annotations

from app.config import GatewaySettings
from app.models import IncomingFile, ValidationOutcome
from app.utils.audio_meta import file_extension

NO_FILE_MESSAGE = "No audio file provided"


class FileValidator:
    """Validate uploaded files before they are forwarded."""

    def __init__(self, max_file_size_bytes: int, allowed_extensions: tuple[str, ...]) -> None:
        self._max_file_size_bytes = max_file_size_bytes
        self._allowed_extensions = allowed_extensions

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> FileValidator:
        return cls(settings.max_file_size_bytes, settings.allowed_extensions)

    def validate(self, file: IncomingFile | None) -> ValidationOutcome:
        """Apply the acceptance rules in order; the first failure wins.

        1. Absent or zero-byte file
        2. Size above the configured maximum
        3. Extension (case-insensitive) outside the allowed set

        Args:
            file: The uploaded file, or None if the request carried none.

        Returns:
            ValidationOutcome with a human-readable reason when invalid.
        """
        if file is None or file.size_bytes == 0:
            return ValidationOutcome.invalid(NO_FILE_MESSAGE)

        if file.size_bytes > self._max_file_size_bytes:
            return ValidationOutcome.invalid(
                f"File size ({file.size_bytes} bytes) exceeds maximum allowed "
                f"({self._max_file_size_bytes} bytes)"
            )

        # "" for missing extensions is never in the allowed set
        extension = file_extension(file.name)
        if extension not in self._allowed_extensions:
            return ValidationOutcome.invalid(
                f"Unsupported file format: {extension}. "
                f"Allowed formats: {', '.join(self._allowed_extensions)}"
            )

        return ValidationOutcome.ok()


__all__ = ["FileValidator", "NO_FILE_MESSAGE"]
