"""Audio Gateway - Utility modules."""

from app.utils.audio_meta import (
    AUDIO_CONTENT_TYPES,
    DEFAULT_CONTENT_TYPE,
    content_type_for,
    file_extension,
)

__all__ = [
    "AUDIO_CONTENT_TYPES",
    "DEFAULT_CONTENT_TYPE",
    "content_type_for",
    "file_extension",
]
