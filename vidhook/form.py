"""
vidhook.form - Upload form controller.

Owns the transient form state and runs one submission at a time:
validation → audio extraction (or placeholder) → webhook upload → status.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

from vidhook.config import VidhookConfig
from vidhook.exceptions import ExtractionError, ValidationError
from vidhook.extract.audio import convert_video_to_mp3, placeholder_audio
from vidhook.extract.capability import is_media_conversion_supported
from vidhook.logging import logger
from vidhook.models import (
    ExtractedAudio,
    SelectedVideo,
    SubmissionPayload,
    UploadResult,
    UserInfo,
)
from vidhook.upload.webhook import upload_to_webhook
from vidhook.validation import check_video_selection, validate_email, validate_name

TEXT_FIELDS = ("name", "surname", "email")

FIELD_ERRORS = {
    "name": "Please enter a valid name",
    "surname": "Please enter a valid surname",
    "email": "Please enter a valid email address",
    "file": "Please select an MP4 or MOV file",
}

CONVERTING_MESSAGE = "Extracting audio from video..."
UNSUPPORTED_MESSAGE = (
    "Audio extraction is not supported in this environment. "
    "Uploading the video with an empty audio file."
)


class FormState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"


class FormData(BaseModel):
    """Values currently entered in the form."""

    name: str = ""
    surname: str = ""
    email: str = ""
    file: SelectedVideo | None = None


def _empty_errors() -> dict[str, str]:
    return {field: "" for field in (*TEXT_FIELDS, "file")}


class UploadForm:
    """Form controller with single-flight submission.

    Collaborators default to the real extractor, uploader and capability
    check and can be replaced for testing.
    """

    def __init__(
        self,
        config: VidhookConfig | None = None,
        extractor: Callable[..., ExtractedAudio] | None = None,
        uploader: Callable[..., UploadResult] | None = None,
        capability_check: Callable[..., bool] | None = None,
        on_progress: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config or VidhookConfig()
        self._extractor = extractor or convert_video_to_mp3
        self._uploader = uploader or upload_to_webhook
        self._capability_check = capability_check or is_media_conversion_supported
        self._on_progress = on_progress

        self.data = FormData()
        self.errors = _empty_errors()
        self.state = FormState.IDLE
        self.status: UploadResult | None = None
        self.conversion_message: str | None = None

    @property
    def is_uploading(self) -> bool:
        return self.state is FormState.UPLOADING

    def update_field(self, field: str, value: str) -> None:
        """Set a text field and clear its error."""
        if field not in TEXT_FIELDS:
            raise KeyError(f"Unknown form field: {field}")
        setattr(self.data, field, value)
        self.errors[field] = ""

    def select_file(self, video: SelectedVideo | None) -> bool:
        """Accept or reject a file selection.

        Returns:
            True if the file was accepted
        """
        try:
            check_video_selection(
                video,
                allowed_types=self.config.allowed_media_types,
                max_bytes=self.config.max_file_size_bytes,
            )
        except ValidationError as e:
            self.data.file = None
            self.errors["file"] = str(e)
            return False

        self.data.file = video
        self.errors["file"] = ""
        return True

    def validate(self) -> bool:
        """Check every field, replacing the error map."""
        errors = _empty_errors()
        if not validate_name(self.data.name):
            errors["name"] = FIELD_ERRORS["name"]
        if not validate_name(self.data.surname):
            errors["surname"] = FIELD_ERRORS["surname"]
        if not validate_email(self.data.email):
            errors["email"] = FIELD_ERRORS["email"]
        if self.data.file is None:
            errors["file"] = FIELD_ERRORS["file"]
        self.errors = errors
        return not any(errors.values())

    def reset(self) -> None:
        """Clear fields, file selection, errors and conversion message."""
        self.data = FormData()
        self.errors = _empty_errors()
        self.conversion_message = None

    def _set_conversion_message(self, message: str) -> None:
        self.conversion_message = message
        if self._on_progress:
            self._on_progress(message)

    def prepare_audio(self, video: SelectedVideo) -> ExtractedAudio:
        """Extract audio, or fall back to an empty placeholder."""
        codec = self.config.audio_codec
        container = self.config.audio_container

        if not self._capability_check(codec, container):
            logger.info("Media conversion unsupported; sending placeholder audio")
            self._set_conversion_message(UNSUPPORTED_MESSAGE)
            return placeholder_audio(video)

        self._set_conversion_message(CONVERTING_MESSAGE)
        try:
            audio = self._extractor(
                video,
                codec=codec,
                container=container,
                fallback_seconds=self.config.fallback_record_seconds,
            )
        except ExtractionError as e:
            self._set_conversion_message(
                f"Audio extraction failed ({e}). Uploading the video with an empty audio file."
            )
            return placeholder_audio(video)

        self._set_conversion_message(f"Audio extracted to {audio.filename}")
        return audio

    def submit(self) -> UploadResult | None:
        """Validate, extract and upload.

        Returns:
            The final UploadResult, or None if the form was invalid or a
            submission is already in progress
        """
        if self.is_uploading:
            logger.debug("Submission already in progress; ignoring submit")
            return None

        if not self.validate():
            return None

        self.state = FormState.UPLOADING
        self.status = None
        video = self.data.file
        try:
            audio = self.prepare_audio(video)
            user = UserInfo(name=self.data.name, surname=self.data.surname, email=self.data.email)
            payload = SubmissionPayload.build(user, video, audio)
            self.status = self._uploader(
                payload,
                self.config.webhook_url,
                timeout=self.config.request_timeout,
            )
            self.reset()
        except Exception as e:
            logger.error("Upload error: %s", e)
            self.status = UploadResult(ok=False, message=f"Upload failed: {e}")
        finally:
            self.state = FormState.IDLE

        return self.status
