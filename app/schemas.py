"""Audio Gateway - Pydantic models for wire formats.

Two wire shapes are kept apart:
- Downstream processor responses use snake_case keys (specs/downstream_process_response.schema.json).
- Public API responses use camelCase keys (specs/audio_upload_response.schema.json).
Translation between them lives in services.gateway_api.service.
"""

from datetime import UTC, datetime  # noqa: I001

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- Downstream Wire Models ---


class DownstreamProcessingDetails(BaseModel):
    """processing_details object of a downstream /process response."""

    model_config = ConfigDict(extra="ignore")

    processing_time: float = Field(default=0.0, description="Processing time in seconds")
    file_size_mb: float = Field(default=0.0, description="Input size in megabytes")
    enhancement_applied: str = Field(default="", description="Enhancement label")


class DownstreamProcessResponse(BaseModel):
    """Body of a 2xx downstream /process response.

    Unknown keys are ignored; any missing key parses as None.
    """

    model_config = ConfigDict(extra="ignore")

    success: bool = Field(default=False, description="Downstream success flag")
    message: str | None = Field(default=None, description="Downstream status message")
    input_file: str | None = Field(default=None, description="Name of the received file")
    processing_id: str | None = Field(default=None, description="Downstream job identifier")
    output_file: str | None = Field(default=None, description="Name of the enhanced file")
    output_path: str | None = Field(default=None, description="Downstream storage path")
    download_url: str | None = Field(default=None, description="Relative download path")
    processing_details: DownstreamProcessingDetails | None = Field(
        default=None, description="Processing metrics"
    )


# --- Public Response Models ---


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProcessingDetailsResponse(_CamelModel):
    """Processing metrics relayed to API clients."""

    processing_time: float = Field(..., description="Processing time in seconds")
    file_size_mb: float = Field(..., description="Input size in megabytes")
    enhancement_applied: str = Field(..., description="Enhancement label")


class AudioUploadResponse(_CamelModel):
    """Response for a successful upload."""

    success: bool = Field(default=True, description="Operation status")
    message: str = Field(..., description="Human-readable status")
    processing_id: str = Field(..., description="Downstream job identifier")
    output_file: str = Field(..., description="Name of the enhanced file")
    download_url: str = Field(..., description="Relative download path")
    processing_details: ProcessingDetailsResponse | None = Field(
        default=None, description="Processing metrics, when reported"
    )


class ErrorResponse(_CamelModel):
    """Response envelope for every failure."""

    success: bool = Field(default=False, description="Operation status")
    message: str = Field(..., description="Human-readable error description")
    timestamp: datetime = Field(default_factory=utc_now, description="UTC time of the error")


class HealthResponse(_CamelModel):
    """Downstream health as seen through the gateway."""

    status: str = Field(..., description="Health status")
    message: str = Field(..., description="Human-readable status")
    timestamp: datetime = Field(default_factory=utc_now, description="UTC time of the check")


class LivenessResponse(_CamelModel):
    """Liveness of the gateway itself."""

    status: str = Field(default="Healthy", description="Health status")
    timestamp: datetime = Field(default_factory=utc_now, description="UTC time of the check")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")


__all__ = [
    "AudioUploadResponse",
    "DownstreamProcessResponse",
    "DownstreamProcessingDetails",
    "ErrorResponse",
    "HealthResponse",
    "LivenessResponse",
    "ProcessingDetailsResponse",
]
