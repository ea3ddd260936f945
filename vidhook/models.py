"""
vidhook.models - Data passed between the form, the extractor and the uploader.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, Field

AUDIO_MEDIA_TYPE = "audio/mpeg"
AUDIO_EXTENSION = ".mp3"


class UserInfo(BaseModel):
    """Contact details entered in the form."""

    name: str
    surname: str
    email: str


class SelectedVideo(BaseModel):
    """A video file chosen by the user, backed by a path on disk."""

    path: Path
    filename: str
    media_type: str
    size: int = Field(ge=0)

    @classmethod
    def from_path(cls, path: Path) -> SelectedVideo:
        """Describe a file on disk, guessing its media type from the extension."""
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            path=path,
            filename=path.name,
            media_type=media_type or "application/octet-stream",
            size=path.stat().st_size,
        )

    def open(self) -> BinaryIO:
        return open(self.path, "rb")


class ExtractedAudio(BaseModel):
    """Audio derived from a video.

    Either recorded audio or a zero-length placeholder. Both carry the
    ``audio/mpeg`` media type and an ``.mp3`` name.
    """

    data: bytes = b""
    filename: str
    media_type: str = AUDIO_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)


class SubmissionPayload(BaseModel):
    """Everything sent to the webhook in one request."""

    name: str = ""
    surname: str = ""
    email: str = ""
    video: SelectedVideo | None = None
    audio: ExtractedAudio | None = None

    @classmethod
    def build(
        cls, user: UserInfo, video: SelectedVideo, audio: ExtractedAudio
    ) -> SubmissionPayload:
        return cls(
            name=user.name,
            surname=user.surname,
            email=user.email,
            video=video,
            audio=audio,
        )


class UploadResult(BaseModel):
    """Outcome shown to the user after a submission."""

    ok: bool
    message: str
