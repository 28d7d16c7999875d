"""Audio Gateway - Request-scoped value objects.

Nothing here outlives a single request. The gateway never persists.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import BinaryIO


# --- Error Kinds ---


class GatewayErrorKind(StrEnum):
    """Classification of every failure the gateway reports."""

    INPUT_REJECTED = "INPUT_REJECTED"
    DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
    DEPENDENCY_REJECTED = "DEPENDENCY_REJECTED"
    TIMEOUT = "TIMEOUT"
    UNEXPECTED = "UNEXPECTED"


# --- Inbound ---


@dataclass
class IncomingFile:
    """An uploaded file as seen by the gateway.

    The stream is single-read and is consumed once when forwarded.
    """

    name: str
    declared_content_type: str
    size_bytes: int
    stream: BinaryIO


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of FileValidator.validate. reason is set iff invalid."""

    valid: bool
    reason: str = ""

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> ValidationOutcome:
        return cls(valid=False, reason=reason)


# --- Downstream ---


@dataclass(frozen=True)
class ProcessingDetails:
    """Processing metrics reported by the downstream processor."""

    processing_time_seconds: float = 0.0
    file_size_mb: float = 0.0
    enhancement_label: str = ""


@dataclass(frozen=True)
class DownstreamResult:
    """Parsed body of a successful downstream /process call.

    Fields are None when the downstream omitted them.
    """

    success: bool = False
    message: str | None = None
    processing_id: str | None = None
    output_file: str | None = None
    download_url: str | None = None
    details: ProcessingDetails | None = None


# --- Gateway Responses ---


@dataclass(frozen=True)
class GatewaySuccess:
    """Processing completed; processing_id and output_file are never empty."""

    processing_id: str
    output_file: str
    download_url: str
    message: str
    details: ProcessingDetails | None = None

    success = True


@dataclass(frozen=True)
class GatewayFailure:
    """Processing did not complete. message is safe to show to clients."""

    message: str
    kind: GatewayErrorKind = GatewayErrorKind.UNEXPECTED

    success = False


GatewayResponse = GatewaySuccess | GatewayFailure


__all__ = [
    "DownstreamResult",
    "GatewayErrorKind",
    "GatewayFailure",
    "GatewayResponse",
    "GatewaySuccess",
    "IncomingFile",
    "ProcessingDetails",
    "ValidationOutcome",
]
