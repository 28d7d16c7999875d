"""Audio Gateway - Processing gateway logic.

Core forwarding pipeline:
- Validate the upload locally (no downstream call for input that can never succeed)
- Health-gate the downstream processor before streaming the file
- Stream the file as multipart to the downstream /process endpoint
- Translate the downstream snake_case reply into a GatewayResponse
- Proxy downloads and health checks

Every Exception is converted to a GatewayFailure here; nothing but task
cancellation crosses into the HTTP layer.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.config import GatewaySettings
from app.models import (
    DownstreamResult,
    GatewayErrorKind,
    GatewayFailure,
    GatewayResponse,
    GatewaySuccess,
    IncomingFile,
    ProcessingDetails,
)
from app.schemas import DownstreamProcessResponse
from app.utils.audio_meta import content_type_for
from app.validation import NO_FILE_MESSAGE, FileValidator

logger = logging.getLogger(__name__)

# --- Client-facing Messages ---

UNAVAILABLE_MESSAGE = "Audio enhancement service is currently unavailable"
TIMEOUT_MESSAGE = "Audio processing timed out. Please try with a smaller file."
DEFAULT_SUCCESS_MESSAGE = "Processing completed successfully"

# Placeholder for identifiers a successful downstream reply left out
UNKNOWN_SENTINEL = "unknown"

# Multipart part name expected by the downstream processor
UPLOAD_FIELD_NAME = "file"


# --- Wire Translation ---


def parse_downstream_result(payload: Any) -> DownstreamResult:
    """Parse a downstream /process JSON body.

    Args:
        payload: Decoded JSON body (snake_case keys).

    Returns:
        DownstreamResult with None for every key the downstream omitted. A JSON null
        body is treated as an empty object.

    Raises:
        pydantic.ValidationError: If the payload is not a compatible object.
    """
    wire = DownstreamProcessResponse.model_validate({} if payload is None else payload)
    details = None
    if wire.processing_details is not None:
        details = ProcessingDetails(
            processing_time_seconds=wire.processing_details.processing_time,
            file_size_mb=wire.processing_details.file_size_mb,
            enhancement_label=wire.processing_details.enhancement_applied,
        )
    return DownstreamResult(
        success=wire.success,
        message=wire.message,
        processing_id=wire.processing_id,
        output_file=wire.output_file,
        download_url=wire.download_url,
        details=details,
    )


def translate_downstream_result(result: DownstreamResult) -> GatewaySuccess:
    """Map a downstream result to the success variant.

    Missing or empty identifiers become "unknown" so a success always
    names its processing job and output file.
    """
    return GatewaySuccess(
        processing_id=result.processing_id or UNKNOWN_SENTINEL,
        output_file=result.output_file or UNKNOWN_SENTINEL,
        download_url=result.download_url or "",
        message=result.message or DEFAULT_SUCCESS_MESSAGE,
        details=result.details,
    )


def download_path_for(filename: str) -> str:
    """Downstream download path for a processed file name."""
    return f"/download/{quote(filename)}"


# --- HTTP Client ---


def create_http_client(settings: GatewaySettings) -> httpx.AsyncClient:
    """Create the pooled client shared by all in-flight requests.

    Outbound connections are capped at settings.max_connections; further
    calls wait for a free connection instead of opening new ones.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_connections,
        ),
    )


# --- Processing Gateway ---


class ProcessingGateway:
    """Validating, health-gated forwarder to the downstream processor."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: GatewaySettings,
        validator: FileValidator | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings
        self._validator = validator or FileValidator.from_settings(settings)

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._settings.downstream_base_url}{path}"

    def _health_timeout(self) -> httpx.Timeout:
        # Waiting on a busy pool is not a liveness failure
        return httpx.Timeout(
            self._settings.health_timeout_seconds,
            pool=self._settings.request_timeout_seconds,
        )

    async def process_audio(self, file: IncomingFile | None) -> GatewayResponse:
        """Validate, health-check, forward, and translate one upload.

        Steps are strictly sequential:
        1. Reject absent/empty files (no downstream call)
        2. Run FileValidator (no downstream call on failure)
        3. Health-check the downstream; do not stream to a known-down service
        4. Stream multipart "file" part to POST {base}/process
        5. 2xx: parse and translate; otherwise report status and body

        Args:
            file: The uploaded file, or None if the request carried none.

        Returns:
            GatewaySuccess or GatewayFailure. Never raises Exception.
        """
        file_name = file.name if file is not None else "unknown"
        try:
            if file is None or file.size_bytes == 0:
                logger.warning("No audio file provided for processing")
                return GatewayFailure(NO_FILE_MESSAGE, GatewayErrorKind.INPUT_REJECTED)

            logger.info("Starting audio processing for file=%s", file.name)

            outcome = self._validator.validate(file)
            if not outcome.valid:
                logger.warning("Rejected file=%s: %s", file.name, outcome.reason)
                return GatewayFailure(outcome.reason, GatewayErrorKind.INPUT_REJECTED)

            if not await self.check_downstream_health():
                logger.warning("Downstream unhealthy, not forwarding file=%s", file.name)
                return GatewayFailure(UNAVAILABLE_MESSAGE, GatewayErrorKind.DEPENDENCY_UNAVAILABLE)

            logger.info("Forwarding file=%s to downstream processor", file.name)
            response = await self._forward(file)

            if response.is_success:
                result = parse_downstream_result(response.json())
                logger.info(
                    "Audio processing completed for file=%s processing_id=%s",
                    file.name,
                    result.processing_id,
                )
                return translate_downstream_result(result)

            logger.error(
                "Downstream returned error status=%d body=%s",
                response.status_code,
                response.text,
            )
            return GatewayFailure(
                f"Audio processing failed: {response.status_code} - {response.text}",
                GatewayErrorKind.DEPENDENCY_REJECTED,
            )

        # TimeoutException subclasses TransportError; keep it first
        except httpx.TimeoutException:
            logger.error("Audio processing timed out for file=%s", file_name, exc_info=True)
            return GatewayFailure(TIMEOUT_MESSAGE, GatewayErrorKind.TIMEOUT)
        except httpx.TransportError:
            logger.error(
                "Network error while processing file=%s", file_name, exc_info=True
            )
            return GatewayFailure(UNAVAILABLE_MESSAGE, GatewayErrorKind.DEPENDENCY_UNAVAILABLE)
        except Exception as e:
            logger.exception("Unexpected error processing file=%s", file_name)
            return GatewayFailure(
                f"An unexpected error occurred: {e}", GatewayErrorKind.UNEXPECTED
            )

    async def _forward(self, file: IncomingFile) -> httpx.Response:
        """POST the file to the downstream processor.

        httpx reads file-like objects in fixed-size chunks while sending,
        so memory use does not grow with the upload size.
        """
        files = {
            UPLOAD_FIELD_NAME: (file.name, file.stream, content_type_for(file.name)),
        }
        return await self._client.post(
            self._url("/process"),
            files=files,
            timeout=self._settings.request_timeout_seconds,
        )

    async def check_downstream_health(self) -> bool:
        """Probe GET {base}/health.

        Returns:
            True iff the downstream answered 2xx. Failures are logged, never raised.
        """
        try:
            response = await self._client.get(
                self._url("/health"), timeout=self._health_timeout()
            )
            return response.is_success
        except Exception:
            logger.warning("Health check failed for downstream processor", exc_info=True)
            return False

    async def download_processed_audio(self, path: str) -> bytes | None:
        """Fetch a processed file from GET {base}{path}.

        Args:
            path: Downstream download path, e.g. "/download/enhanced_test.wav".

        Returns:
            The full body, or None on any failure. None means not found, not a fault.
        """
        try:
            logger.info("Downloading processed audio from path=%s", path)
            response = await self._client.get(
                self._url(path), timeout=self._settings.request_timeout_seconds
            )
            response.raise_for_status()
            audio_data = response.content
            logger.info("Downloaded processed audio, size=%d bytes", len(audio_data))
            return audio_data
        except Exception:
            logger.error("Error downloading processed audio from path=%s", path, exc_info=True)
            return None


__all__ = [
    "DEFAULT_SUCCESS_MESSAGE",
    "ProcessingGateway",
    "TIMEOUT_MESSAGE",
    "UNAVAILABLE_MESSAGE",
    "UNKNOWN_SENTINEL",
    "create_http_client",
    "download_path_for",
    "parse_downstream_result",
    "translate_downstream_result",
]
