"""Audio Gateway - Configuration.

Settings are read once from the environment into a frozen GatewaySettings.
No external config libraries. Unparsable values fall back to defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Downstream audio enhancement processor
DEFAULT_DOWNSTREAM_BASE_URL = "http://localhost:8000"

# Audio enhancement is long-running; forward and download share this timeout
DEFAULT_REQUEST_TIMEOUT_SECONDS = 600.0

# Downstream health check timeout
DEFAULT_HEALTH_TIMEOUT_SECONDS = 5.0

# Outbound connection pool bound
DEFAULT_MAX_CONNECTIONS = 10

# 100 MiB
DEFAULT_MAX_FILE_SIZE_BYTES = 104857600

DEFAULT_ALLOWED_EXTENSIONS = (".wav", ".mp3", ".flac", ".m4a", ".aac", ".ogg")

DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

# Any origin, for browser frontends during development
DEFAULT_CORS_ORIGINS = ("*",)

# Daily-rotated log file lives here, relative to the working directory
DEFAULT_LOG_DIR = "logs"

ENV_PREFIX = "AUDIO_GATEWAY_"


def normalize_extension(ext: str) -> str:
    """Lower-case an extension and ensure a single leading dot."""
    ext = ext.strip().lower().lstrip(".")
    return f".{ext}" if ext else ""


@dataclass(frozen=True)
class GatewaySettings:
    """Process-wide gateway configuration, read-only after startup."""

    downstream_base_url: str = DEFAULT_DOWNSTREAM_BASE_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    health_timeout_seconds: float = DEFAULT_HEALTH_TIMEOUT_SECONDS
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    log_level: str = DEFAULT_LOG_LEVEL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_dir: str = DEFAULT_LOG_DIR

    def __post_init__(self) -> None:
        if not self.downstream_base_url:
            raise ValueError("downstream_base_url must not be empty")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        if self.health_timeout_seconds <= 0:
            raise ValueError("health_timeout_seconds must be positive")
        if self.max_connections < 1:
            raise ValueError("max_connections must be at least 1")
        if self.max_file_size_bytes < 1:
            raise ValueError("max_file_size_bytes must be at least 1")

        extensions = tuple(
            dict.fromkeys(e for e in map(normalize_extension, self.allowed_extensions) if e)
        )
        if not extensions:
            raise ValueError("allowed_extensions must contain at least one extension")

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "downstream_base_url", self.downstream_base_url.rstrip("/"))
        object.__setattr__(self, "allowed_extensions", extensions)
        object.__setattr__(self, "log_level", self.log_level.upper())
        origins = tuple(o.strip().rstrip("/") for o in self.cors_origins if o.strip())
        object.__setattr__(self, "cors_origins", origins)


def _get_env(name: str) -> str | None:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_positive_int(name: str, default: int) -> int:
    """Get a positive integer from the environment or use default.

    Args:
        name: Variable name without the AUDIO_GATEWAY_ prefix.
        default: Fallback when unset, unparsable, or not positive.

    Returns:
        The parsed value or the default.
    """
    env_val = _get_env(name)
    if env_val:
        try:
            parsed = int(env_val)
            if parsed > 0:
                return parsed
        except ValueError:
            pass
    return default


def _get_positive_float(name: str, default: float) -> float:
    """Float counterpart of _get_positive_int."""
    env_val = _get_env(name)
    if env_val:
        try:
            parsed = float(env_val)
            if parsed > 0:
                return parsed
        except ValueError:
            pass
    return default


def _get_extensions(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Get a comma-separated extension list; empty lists fall back to default."""
    env_val = _get_env(name)
    if env_val:
        extensions = tuple(e for e in (normalize_extension(p) for p in env_val.split(",")) if e)
        if extensions:
            return extensions
    return default


def _get_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    env_val = _get_env(name)
    if env_val:
        items = tuple(p.strip() for p in env_val.split(",") if p.strip())
        if items:
            return items
    return default


def load_settings() -> GatewaySettings:
    """Build GatewaySettings from AUDIO_GATEWAY_* environment variables."""
    return GatewaySettings(
        downstream_base_url=_get_env("DOWNSTREAM_URL") or DEFAULT_DOWNSTREAM_BASE_URL,
        request_timeout_seconds=_get_positive_float(
            "REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        health_timeout_seconds=_get_positive_float(
            "HEALTH_TIMEOUT_SEC", DEFAULT_HEALTH_TIMEOUT_SECONDS
        ),
        max_connections=_get_positive_int("MAX_CONNECTIONS", DEFAULT_MAX_CONNECTIONS),
        max_file_size_bytes=_get_positive_int(
            "MAX_FILE_SIZE_BYTES", DEFAULT_MAX_FILE_SIZE_BYTES
        ),
        allowed_extensions=_get_extensions("ALLOWED_EXTENSIONS", DEFAULT_ALLOWED_EXTENSIONS),
        log_level=_get_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        host=_get_env("HOST") or DEFAULT_HOST,
        port=_get_positive_int("PORT", DEFAULT_PORT),
        cors_origins=_get_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        log_dir=_get_env("LOG_DIR") or DEFAULT_LOG_DIR,
    )


__all__ = [
    "GatewaySettings",
    "load_settings",
    "normalize_extension",
]
