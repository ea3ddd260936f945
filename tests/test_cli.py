"""Tests for vidhook CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from vidhook import __version__
from vidhook.cli import app

runner = CliRunner()

WEBHOOK_URL = "https://hooks.example.com/upload"
USER_ARGS = ["--name", "Ada", "--surname", "Lovelace", "--email", "ada@example.com"]


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory so no vidhook.yaml is found."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def unsupported():
    with patch("vidhook.form.is_media_conversion_supported", return_value=False):
        yield


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestInitCommand:
    def test_init_writes_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "-d", str(tmp_path), "-w", WEBHOOK_URL])
        assert result.exit_code == 0
        config = yaml.safe_load((tmp_path / "vidhook.yaml").read_text())
        assert config["webhook_url"] == WEBHOOK_URL
        assert config["fallback_record_seconds"] == 10.0

    def test_init_without_webhook_hints(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "-d", str(tmp_path)])
        assert result.exit_code == 0
        assert "Set webhook_url" in result.output

    def test_init_fails_if_config_exists(self, tmp_path: Path) -> None:
        (tmp_path / "vidhook.yaml").write_text("{}")
        result = runner.invoke(app, ["init", "-d", str(tmp_path)])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_rejects_bad_url(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "-d", str(tmp_path), "-w", "hooks.example.com"])
        assert result.exit_code == 1
        assert not (tmp_path / "vidhook.yaml").exists()


class TestSubmitCommand:
    def test_requires_webhook_url(self, video_file: Path) -> None:
        result = runner.invoke(app, ["submit", str(video_file), *USER_ARGS])
        assert result.exit_code == 1
        assert "No webhook URL configured" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["submit", str(tmp_path / "nope.mp4"), *USER_ARGS, "-w", WEBHOOK_URL]
        )
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_rejects_wrong_type(self, tmp_path: Path) -> None:
        avi = tmp_path / "clip.avi"
        avi.write_bytes(b"RIFF")
        with patch("vidhook.upload.webhook.requests.post") as post:
            result = runner.invoke(app, ["submit", str(avi), *USER_ARGS, "-w", WEBHOOK_URL])
        assert result.exit_code == 1
        assert "Only MP4 or MOV" in result.output
        post.assert_not_called()

    def test_rejects_invalid_email(self, video_file: Path) -> None:
        args = ["--name", "Ada", "--surname", "Lovelace", "--email", "ada@example"]
        with patch("vidhook.upload.webhook.requests.post") as post:
            result = runner.invoke(app, ["submit", str(video_file), *args, "-w", WEBHOOK_URL])
        assert result.exit_code == 1
        assert "valid email" in result.output
        post.assert_not_called()

    def test_successful_upload(self, video_file: Path, unsupported) -> None:
        response = MagicMock(status_code=200, text="Accepted")
        with patch("vidhook.upload.webhook.requests.post", return_value=response) as post:
            result = runner.invoke(app, ["submit", str(video_file), *USER_ARGS, "-w", WEBHOOK_URL])
        assert result.exit_code == 0
        assert "Files uploaded successfully" in result.output
        assert "not supported" in result.output
        assert post.call_args.args[0] == WEBHOOK_URL

    def test_prompts_for_missing_fields(self, video_file: Path, unsupported) -> None:
        response = MagicMock(status_code=200, text="Accepted")
        with patch("vidhook.upload.webhook.requests.post", return_value=response) as post:
            result = runner.invoke(
                app,
                ["submit", str(video_file), "-w", WEBHOOK_URL],
                input="Ada\nLovelace\nada@example.com\n",
            )
        assert result.exit_code == 0
        assert post.call_args.kwargs["data"]["surname"] == "Lovelace"

    def test_server_error(self, video_file: Path, unsupported) -> None:
        response = MagicMock(status_code=500, text="boom")
        with patch("vidhook.upload.webhook.requests.post", return_value=response):
            result = runner.invoke(app, ["submit", str(video_file), *USER_ARGS, "-w", WEBHOOK_URL])
        assert result.exit_code == 1
        assert "Upload failed: Server responded with 500: boom" in result.output

    def test_webhook_from_config_file(self, video_file: Path, config_dir: Path, unsupported) -> None:
        response = MagicMock(status_code=200, text="")
        with patch("vidhook.upload.webhook.requests.post", return_value=response) as post:
            result = runner.invoke(
                app,
                ["submit", str(video_file), *USER_ARGS, "-c", str(config_dir / "vidhook.yaml")],
            )
        assert result.exit_code == 0
        assert post.call_args.args[0] == WEBHOOK_URL

    def test_webhook_from_environment(
        self, video_file: Path, unsupported, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VIDHOOK_WEBHOOK_URL", "https://env.example.com/hook")
        response = MagicMock(status_code=200, text="")
        with patch("vidhook.upload.webhook.requests.post", return_value=response) as post:
            result = runner.invoke(app, ["submit", str(video_file), *USER_ARGS])
        assert result.exit_code == 0
        assert post.call_args.args[0] == "https://env.example.com/hook"


class TestCheckCommand:
    def test_missing_ffmpeg(self) -> None:
        with patch("vidhook.extract.capability.shutil.which", return_value=None):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "ffmpeg" in result.output

    def test_supported(self) -> None:
        report = {
            "ffmpeg_path": "/usr/bin/ffmpeg",
            "ffprobe_path": "/usr/bin/ffprobe",
            "ffmpeg_version": "6.1.1",
            "codec": "libopus",
            "container": "webm",
            "encoder_available": True,
            "muxer_available": True,
            "supported": True,
        }
        with (
            patch("vidhook.cli.require_ffmpeg"),
            patch("vidhook.cli.probe_capabilities", return_value=report),
        ):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "Audio extraction supported" in result.output

    def test_unsupported_codec(self) -> None:
        report = {
            "ffmpeg_path": "/usr/bin/ffmpeg",
            "ffprobe_path": "/usr/bin/ffprobe",
            "ffmpeg_version": "6.1.1",
            "codec": "libopus",
            "container": "webm",
            "encoder_available": False,
            "muxer_available": True,
            "supported": False,
        }
        with (
            patch("vidhook.cli.require_ffmpeg"),
            patch("vidhook.cli.probe_capabilities", return_value=report),
        ):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "empty audio file" in result.output
