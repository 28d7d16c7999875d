"""Audio Gateway - FastAPI application.

Public HTTP surface of the gateway. Routes translate GatewayResponse values
into HTTP responses; all forwarding decisions live in service.py.

Run with:
    python -m services.gateway_api.main
    uvicorn services.gateway_api.main:app --reload  # dev server only
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated
from urllib.parse import quote

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app import __version__
from app.config import GatewaySettings, load_settings
from app.logging_utils import configure_logging
from app.models import GatewaySuccess, IncomingFile
from app.schemas import (
    AudioUploadResponse,
    ErrorResponse,
    HealthResponse,
    LivenessResponse,
    ProcessingDetailsResponse,
)
from app.utils.audio_meta import DEFAULT_CONTENT_TYPE, content_type_for
from services.gateway_api.service import (
    UNAVAILABLE_MESSAGE,
    ProcessingGateway,
    create_http_client,
    download_path_for,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "Audio Gateway API"

# --- Settings ---

# Module-level settings (loaded once, on first use)
_settings: GatewaySettings | None = None


def get_settings() -> GatewaySettings:
    """Get the process-wide settings, loading them from the environment once."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


# --- Lifespan ---


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Opens the pooled downstream client on startup and closes it on shutdown.
    """
    settings = get_settings()
    logger.info(
        "Starting %s, downstream=%s max_connections=%d",
        SERVICE_NAME,
        settings.downstream_base_url,
        settings.max_connections,
    )
    async with create_http_client(settings) as http_client:
        app.state.http_client = http_client
        yield
    logger.info("Stopped %s", SERVICE_NAME)


# --- FastAPI App ---


app = FastAPI(
    title=SERVICE_NAME,
    description="Validates audio uploads and relays them to the audio enhancement processor.",
    version=__version__,
    lifespan=lifespan,
)

# Browser frontends call the gateway cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_gateway(request: Request) -> ProcessingGateway:
    """Dependency that provides a gateway bound to the shared client."""
    return ProcessingGateway(request.app.state.http_client, get_settings())


# --- Response Helpers ---


def make_error_response(status_code: int, message: str) -> JSONResponse:
    """Create a JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(mode="json", by_alias=True),
    )


def to_upload_response(result: GatewaySuccess) -> AudioUploadResponse:
    """Map the success variant onto the public camelCase shape."""
    details = None
    if result.details is not None:
        details = ProcessingDetailsResponse(
            processing_time=result.details.processing_time_seconds,
            file_size_mb=result.details.file_size_mb,
            enhancement_applied=result.details.enhancement_label,
        )
    return AudioUploadResponse(
        message=result.message,
        processing_id=result.processing_id,
        output_file=result.output_file,
        download_url=result.download_url,
        processing_details=details,
    )


def content_disposition(filename: str) -> str:
    """Attachment header value echoing the filename."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def _upload_size(upload: UploadFile) -> int:
    """Size of an upload, measuring the spooled file if the parser did not."""
    if upload.size is not None:
        return upload.size
    stream = upload.file
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


def to_incoming_file(upload: UploadFile | None) -> IncomingFile | None:
    if upload is None:
        return None
    return IncomingFile(
        name=upload.filename or "",
        declared_content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
        size_bytes=_upload_size(upload),
        stream=upload.file,
    )


# --- Endpoints ---


@app.post(
    "/api/audio/upload",
    response_model=AudioUploadResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file or processing error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Upload and enhance an audio file",
    description="Validate an audio file and forward it to the enhancement processor.",
)
async def upload_audio(
    gateway: Annotated[ProcessingGateway, Depends(get_gateway)],
    file: Annotated[
        UploadFile | None,
        File(description="Audio file to process (WAV, MP3, FLAC, M4A, AAC, OGG)"),
    ] = None,
):
    """Upload an audio file for enhancement.

    Every gateway failure is reported as 400 with its message; only an
    error escaping the gateway itself becomes a 500.
    """
    try:
        logger.info(
            "Received audio upload request for file=%s",
            file.filename if file is not None else "unknown",
        )
        result = await gateway.process_audio(to_incoming_file(file))

        if isinstance(result, GatewaySuccess):
            logger.info("Audio file processed, processing_id=%s", result.processing_id)
            return JSONResponse(
                status_code=200,
                content=to_upload_response(result).model_dump(mode="json", by_alias=True),
            )

        logger.warning("Audio processing failed (%s): %s", result.kind, result.message)
        return make_error_response(400, result.message)
    except Exception:
        # Log full exception server-side, return generic message to client
        logger.exception("Unexpected error during audio upload processing")
        return make_error_response(
            500, "An unexpected error occurred while processing the audio file"
        )


@app.get(
    "/api/audio/download/{filename}",
    response_class=Response,
    responses={
        200: {"content": {"application/octet-stream": {}}, "description": "Processed audio"},
        404: {"model": ErrorResponse, "description": "File not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Download a processed audio file",
)
async def download_processed_audio(
    filename: str,
    gateway: Annotated[ProcessingGateway, Depends(get_gateway)],
):
    """Proxy a processed file from the downstream processor."""
    try:
        logger.info("Download request for processed audio=%s", filename)
        audio_data = await gateway.download_processed_audio(download_path_for(filename))

        if not audio_data:
            logger.warning("Processed audio file not found: %s", filename)
            return make_error_response(404, f"Processed audio file '{filename}' not found")

        return Response(
            content=audio_data,
            media_type=content_type_for(filename),
            headers={"Content-Disposition": content_disposition(filename)},
        )
    except Exception:
        logger.exception("Error downloading processed audio=%s", filename)
        return make_error_response(500, "Error downloading the processed audio file")


@app.get(
    "/api/audio/health",
    response_model=HealthResponse,
    responses={503: {"model": ErrorResponse, "description": "Processor unavailable"}},
    summary="Downstream processor health",
)
async def downstream_health(
    gateway: Annotated[ProcessingGateway, Depends(get_gateway)],
):
    """Report whether the enhancement processor is reachable."""
    try:
        if await gateway.check_downstream_health():
            return JSONResponse(
                status_code=200,
                content=HealthResponse(
                    status="Healthy",
                    message="Audio enhancement service is available",
                ).model_dump(mode="json", by_alias=True),
            )
        return make_error_response(503, UNAVAILABLE_MESSAGE)
    except Exception:
        logger.exception("Error checking service health")
        return make_error_response(503, "Unable to check service health")


@app.get("/health", response_model=LivenessResponse, summary="Health check")
def health_check():
    """Liveness of the gateway itself, independent of the processor."""
    return LivenessResponse(service=SERVICE_NAME, version=__version__).model_dump(
        mode="json", by_alias=True
    )


# --- For testing: allow overriding settings ---


def override_settings(settings: GatewaySettings | None) -> None:
    """Override the process-wide settings for testing (None reloads from env)."""
    global _settings
    _settings = settings


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
