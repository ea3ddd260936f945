"""
vidhook.validation - Form field and file selection checks.

Name and email checks are pure and never raise. The selection check raises
ValidationError with the message shown next to the file field.
"""

from __future__ import annotations

import re

from vidhook.config import DEFAULT_MEDIA_TYPES
from vidhook.exceptions import ValidationError
from vidhook.models import SelectedVideo

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NAME_PUNCTUATION = frozenset(" '-")

MAX_FILE_SIZE_BYTES = 100 * 1024 * 1024


def validate_name(name: str | None) -> bool:
    """Check a name or surname.

    Args:
        name: Raw input

    Returns:
        True if the trimmed value has at least 2 characters and contains only
        letters, spaces, apostrophes and hyphens
    """
    if not name:
        return False
    trimmed = name.strip()
    if len(trimmed) < 2:
        return False
    return all(ch.isalpha() or ch in NAME_PUNCTUATION for ch in trimmed)


def validate_email(email: str | None) -> bool:
    """Check an email address has the shape local@domain.tld."""
    if not email:
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def check_video_selection(
    video: SelectedVideo | None,
    allowed_types: list[str] | None = None,
    max_bytes: int = MAX_FILE_SIZE_BYTES,
) -> None:
    """Validate a selected video before it is accepted by the form.

    The size limit is checked before the type, so an oversized file always
    reports the size error.

    Args:
        video: Selected file, or None when nothing was chosen
        allowed_types: Accepted media types (MP4 and QuickTime by default)
        max_bytes: Largest accepted size in bytes

    Raises:
        ValidationError: If the selection is missing, too large, or of the
            wrong type
    """
    if video is None:
        raise ValidationError("Please select a file")

    if video.size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationError(f"File size should be less than {limit_mb}MB")

    if video.media_type not in (allowed_types or DEFAULT_MEDIA_TYPES):
        raise ValidationError("Only MP4 or MOV files are allowed")
