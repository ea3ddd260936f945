"""Tests for vidhook.models module."""

from __future__ import annotations

from pathlib import Path

from vidhook.models import ExtractedAudio, SelectedVideo, SubmissionPayload, UserInfo


class TestSelectedVideo:
    def test_from_mp4_path(self, video_file: Path) -> None:
        video = SelectedVideo.from_path(video_file)
        assert video.filename == "engine.mp4"
        assert video.media_type == "video/mp4"
        assert video.size == video_file.stat().st_size

    def test_from_mov_path(self, tmp_path: Path) -> None:
        path = tmp_path / "take.mov"
        path.write_bytes(b"moov")
        video = SelectedVideo.from_path(path)
        assert video.media_type == "video/quicktime"
        assert video.size == 4

    def test_unknown_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "take.zzzunknown"
        path.write_bytes(b"")
        assert SelectedVideo.from_path(path).media_type == "application/octet-stream"

    def test_open_streams_content(self, sample_video: SelectedVideo, video_file: Path) -> None:
        with sample_video.open() as f:
            assert f.read() == video_file.read_bytes()


class TestExtractedAudio:
    def test_defaults_to_audio_mpeg(self) -> None:
        audio = ExtractedAudio(filename="a.mp3")
        assert audio.media_type == "audio/mpeg"
        assert audio.size == 0

    def test_size(self, sample_audio: ExtractedAudio) -> None:
        assert sample_audio.size == len(b"OggS recorded audio")


class TestSubmissionPayload:
    def test_build(self, sample_video: SelectedVideo, sample_audio: ExtractedAudio) -> None:
        user = UserInfo(name="Ada", surname="Lovelace", email="ada@example.com")
        payload = SubmissionPayload.build(user, sample_video, sample_audio)
        assert payload.name == "Ada"
        assert payload.surname == "Lovelace"
        assert payload.email == "ada@example.com"
        assert payload.video == sample_video
        assert payload.audio == sample_audio

    def test_empty_payload_allowed(self) -> None:
        payload = SubmissionPayload()
        assert payload.video is None
        assert payload.audio is None
