"""
vidhook.upload.webhook - Multipart POST to the configured webhook.

One attempt per submission: no retries, no idempotency key. Any 2xx response
counts as success and its body is never parsed.
"""

from __future__ import annotations

from typing import Any, BinaryIO

import requests

from vidhook.exceptions import ConfigError, MissingDataError, UploadError
from vidhook.logging import logger
from vidhook.models import SubmissionPayload, UploadResult

SUCCESS_MESSAGE = "Files uploaded successfully"
NETWORK_FAILURE_MESSAGE = "Failed to upload files. Please try again."


def check_payload(payload: SubmissionPayload) -> None:
    """Raise MissingDataError unless every field and both files are present."""
    fields_present = all([payload.name, payload.surname, payload.email])
    if not fields_present or payload.video is None or payload.audio is None:
        raise MissingDataError("Missing required form data")


def build_multipart(
    payload: SubmissionPayload,
    video_stream: BinaryIO | bytes,
) -> tuple[dict[str, str], dict[str, tuple[str, Any, str]]]:
    """Build the form fields and file parts for requests.

    Args:
        payload: Checked submission payload
        video_stream: Open handle (or bytes) of the original video

    Returns:
        (data, files) for ``requests.post``; five parts in total
    """
    data = {
        "name": payload.name,
        "surname": payload.surname,
        "email": payload.email,
    }
    files = {
        "originalFile": (payload.video.filename, video_stream, payload.video.media_type),
        "audioFile": (payload.audio.filename, payload.audio.data, payload.audio.media_type),
    }
    return data, files


def upload_to_webhook(
    payload: SubmissionPayload,
    webhook_url: str | None,
    timeout: float | None = None,
) -> UploadResult:
    """Send the user details, video and audio to the webhook.

    The multipart boundary and content-type header are left to requests.

    Args:
        payload: Submission payload
        webhook_url: Destination URL
        timeout: Optional request timeout in seconds (none by default)

    Returns:
        UploadResult with ok=True

    Raises:
        MissingDataError: If a field or file is missing (no request is made)
        ConfigError: If no webhook URL is configured
        UploadError: If the server rejects the upload or the request fails
    """
    check_payload(payload)
    if not webhook_url:
        raise ConfigError("No webhook URL configured")

    logger.debug(
        "Uploading %s (%d bytes) and %s (%d bytes)",
        payload.video.filename,
        payload.video.size,
        payload.audio.filename,
        payload.audio.size,
    )

    try:
        video_stream = payload.video.open()
    except OSError as e:
        raise UploadError(f"Cannot read {payload.video.filename}: {e}") from e

    with video_stream:
        data, files = build_multipart(payload, video_stream)
        try:
            response = requests.post(webhook_url, data=data, files=files, timeout=timeout)
        except (requests.RequestException, OSError) as e:
            logger.error("Error uploading files: %s", e)
            raise UploadError(NETWORK_FAILURE_MESSAGE) from e

    if not 200 <= response.status_code < 300:
        logger.error("Webhook responded with %s", response.status_code)
        raise UploadError(f"Server responded with {response.status_code}: {response.text}")

    return UploadResult(ok=True, message=SUCCESS_MESSAGE)
