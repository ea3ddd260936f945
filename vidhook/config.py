"""
vidhook.config - YAML config loading, environment overrides, validation.

Handles locating vidhook.yaml, applying the VIDHOOK_WEBHOOK_URL override,
and validating all parameters.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from vidhook.exceptions import ConfigError

CONFIG_FILENAME = "vidhook.yaml"
WEBHOOK_URL_ENV = "VIDHOOK_WEBHOOK_URL"

DEFAULT_MEDIA_TYPES = ["video/mp4", "video/quicktime"]


class VidhookConfig(BaseModel):
    """Resolved configuration for the uploader."""

    webhook_url: str | None = None

    max_file_size_mb: int = Field(default=100, gt=0)
    allowed_media_types: list[str] = Field(default_factory=lambda: list(DEFAULT_MEDIA_TYPES))

    audio_codec: str = "libopus"
    audio_container: str = "webm"
    # Recording length when the video reports no usable duration.
    fallback_record_seconds: float = Field(default=10.0, gt=0.0)

    request_timeout: float | None = Field(default=None, gt=0.0)

    config_path: Path | None = None

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("webhook_url must start with http:// or https://")
        return v

    @field_validator("allowed_media_types")
    @classmethod
    def validate_media_types(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("allowed_media_types must not be empty")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


def find_config_file(start: Path | None = None) -> Path | None:
    """Find vidhook.yaml in the start directory or any of its parents."""
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def load_config(path: Path | None = None, webhook_url: str | None = None) -> VidhookConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file; searched for from the cwd when omitted
        webhook_url: Override taking precedence over file and environment

    Returns:
        Validated VidhookConfig

    Raises:
        ConfigError: If an explicit file is missing or any value is invalid
    """
    raw_config: dict[str, Any] = {}

    if path is not None and not path.exists():
        raise ConfigError(f"No config file found at {path}")

    config_file = path or find_config_file()
    if config_file is not None:
        try:
            with open(config_file) as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ConfigError(f"{config_file} must contain a mapping")
        raw_config["config_path"] = config_file

    env_url = os.environ.get(WEBHOOK_URL_ENV)
    if env_url:
        raw_config["webhook_url"] = env_url
    if webhook_url:
        raw_config["webhook_url"] = webhook_url

    try:
        return VidhookConfig(**raw_config)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def create_default_config(webhook_url: str | None = None) -> dict[str, Any]:
    """Create a default config mapping for a new vidhook.yaml."""
    try:
        defaults = VidhookConfig(webhook_url=webhook_url)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    return defaults.model_dump(exclude={"config_path"})


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
