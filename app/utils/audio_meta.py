"""Audio Gateway - Audio file naming utilities.

Extension extraction and media type resolution from filenames only.
No audio decoding: the gateway never opens the bytes it forwards.
"""

from pathlib import PurePath

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Shared by outbound multipart parts and download responses
AUDIO_CONTENT_TYPES: dict[str, str] = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
}


def file_extension(filename: str | None) -> str:
    """Get the lower-cased extension of a filename.

    Args:
        filename: Filename or path string. None is treated as empty.

    Returns:
        Extension including the leading dot (e.g. ".wav"), or "" if none.
    """
    if not filename:
        return ""
    # Taken after the last dot of the basename, so ".wav" counts as ".wav"
    _, dot, ext = PurePath(filename.replace("\\", "/")).name.rpartition(".")
    if not dot or not ext:
        return ""
    return f".{ext.lower()}"


def content_type_for(filename: str | None) -> str:
    """Resolve the media type for a filename from its extension.

    Args:
        filename: Filename or path string.

    Returns:
        Audio media type for known extensions, application/octet-stream otherwise.
    """
    return AUDIO_CONTENT_TYPES.get(file_extension(filename), DEFAULT_CONTENT_TYPE)


__all__ = [
    "AUDIO_CONTENT_TYPES",
    "DEFAULT_CONTENT_TYPE",
    "content_type_for",
    "file_extension",
]
