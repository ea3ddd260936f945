"""
vidhook.exceptions - Custom exception classes.

All Vidhook-specific exceptions inherit from VidhookError.
"""


class VidhookError(Exception):
    """Base exception for all Vidhook errors."""

    pass


class ConfigError(VidhookError):
    """Configuration loading or validation error."""

    pass


class ValidationError(VidhookError):
    """Form field or file selection validation error."""

    pass


class ExtractionError(VidhookError):
    """Audio extraction error."""

    pass


class UploadError(VidhookError):
    """Webhook upload error."""

    pass


class MissingDataError(UploadError):
    """Submission attempted without all required fields and files."""

    pass


class DependencyError(VidhookError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
