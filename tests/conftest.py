"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from vidhook.config import VidhookConfig
from vidhook.models import ExtractedAudio, SelectedVideo

WEBHOOK_URL = "https://hooks.example.com/upload"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's VIDHOOK_WEBHOOK_URL out of the tests."""
    monkeypatch.delenv("VIDHOOK_WEBHOOK_URL", raising=False)


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    """Create a small fake MP4 on disk."""
    path = tmp_path / "engine.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42 fake video")
    return path


@pytest.fixture
def sample_video(video_file: Path) -> SelectedVideo:
    """Return a valid video selection backed by video_file."""
    return SelectedVideo.from_path(video_file)


@pytest.fixture
def sample_audio() -> ExtractedAudio:
    """Return a non-empty extracted audio artifact."""
    return ExtractedAudio(data=b"OggS recorded audio", filename="engine.mp3")


@pytest.fixture
def sample_config() -> VidhookConfig:
    """Return a configuration pointing at a test webhook."""
    return VidhookConfig(webhook_url=WEBHOOK_URL)


@pytest.fixture
def sample_user() -> dict[str, str]:
    """Return valid form field values."""
    return {"name": "Ada", "surname": "Lovelace", "email": "ada@example.com"}


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create a directory holding a vidhook.yaml."""
    project_dir = tmp_path / "uploader"
    project_dir.mkdir()
    config = {
        "webhook_url": WEBHOOK_URL,
        "fallback_record_seconds": 5.0,
    }
    with open(project_dir / "vidhook.yaml", "w") as f:
        yaml.dump(config, f)
    return project_dir
