"""
vidhook.extract.audio - FFmpeg audio extraction.

Records the audio track of a video into a single blob named ``<base>.mp3``.
The bytes are whatever the recorder produced (webm/opus by default); the
artifact is tagged ``audio/mpeg`` regardless, which is what the webhook
expects to receive.
"""

from __future__ import annotations

import json
import math
import subprocess
import tempfile
from pathlib import Path
from typing import Any

from vidhook.exceptions import ExtractionError
from vidhook.logging import logger
from vidhook.models import AUDIO_EXTENSION, AUDIO_MEDIA_TYPE, ExtractedAudio, SelectedVideo

DEFAULT_FALLBACK_SECONDS = 10.0


def audio_filename(video_filename: str) -> str:
    """Swap a video file name's extension for .mp3."""
    return Path(video_filename).with_suffix(AUDIO_EXTENSION).name


def placeholder_audio(video: SelectedVideo) -> ExtractedAudio:
    """Return the empty stand-in sent when extraction is unavailable or fails."""
    return ExtractedAudio(
        data=b"",
        filename=audio_filename(video.filename),
        media_type=AUDIO_MEDIA_TYPE,
    )


def recording_seconds(duration: float | None, fallback: float = DEFAULT_FALLBACK_SECONDS) -> float:
    """Length of the recording: the media duration if known, else the fallback."""
    if duration is not None and math.isfinite(duration) and duration > 0:
        return duration
    return fallback


def probe_media(path: Path) -> dict[str, Any]:
    """Probe a media file for its duration and whether it carries audio.

    Args:
        path: Path to the media file

    Returns:
        Dict with 'duration_seconds' (None if unknown) and 'has_audio'

    Raises:
        ExtractionError: If ffprobe cannot read the file
    """
    cmd = [
        "ffprobe",
        "-v",
        "quiet",
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
        str(path),
    ]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise ExtractionError(f"Error loading video file: {e}") from e
    if proc.returncode != 0:
        raise ExtractionError(f"Error loading video file: ffprobe failed for {path.name}")

    try:
        data = json.loads(proc.stdout or "{}")
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Error loading video file: unreadable metadata ({e})") from e

    audio_stream = next(
        (s for s in data.get("streams", []) if s.get("codec_type") == "audio"),
        None,
    )

    duration = None
    raw_duration = data.get("format", {}).get("duration")
    if raw_duration is not None:
        try:
            duration = float(raw_duration)
        except (TypeError, ValueError):
            duration = None

    return {
        "duration_seconds": duration,
        "has_audio": audio_stream is not None,
    }


def convert_video_to_mp3(
    video: SelectedVideo,
    codec: str = "libopus",
    container: str = "webm",
    fallback_seconds: float = DEFAULT_FALLBACK_SECONDS,
) -> ExtractedAudio:
    """Extract the audio track of a video.

    Recording covers the full media duration, or ``fallback_seconds`` when
    the duration is unknown. Each call works in its own temporary directory,
    removed on every exit path.

    Args:
        video: Validated video selection
        codec: FFmpeg audio encoder for the recording
        container: FFmpeg muxer for the recording
        fallback_seconds: Recording length when duration is unavailable

    Returns:
        ExtractedAudio holding the complete recording

    Raises:
        ExtractionError: If probing, recording, or reading the output fails
    """
    try:
        metadata = probe_media(video.path)
        if not metadata["has_audio"]:
            raise ExtractionError(f"Error loading video file: no audio track in {video.filename}")
        seconds = recording_seconds(metadata["duration_seconds"], fallback_seconds)
        logger.debug("Recording %.3fs of audio from %s", seconds, video.filename)

        with tempfile.TemporaryDirectory(prefix="vidhook-") as workdir:
            output = Path(workdir) / f"audio.{container}"
            cmd = [
                "ffmpeg",
                "-y",
                "-v",
                "error",
                "-i",
                str(video.path),
                "-vn",
                "-t",
                f"{seconds:.3f}",
                "-acodec",
                codec,
                "-f",
                container,
                str(output),
            ]
            proc = subprocess.run(cmd, capture_output=True, text=True)
            if proc.returncode != 0:
                raise ExtractionError(f"Error recording audio from video: {proc.stderr.strip()}")
            if not output.exists():
                raise ExtractionError("Error recording audio from video: no output produced")

            data = output.read_bytes()

    except ExtractionError as e:
        logger.warning("Audio extraction failed for %s: %s", video.filename, e)
        raise
    except Exception as e:
        logger.warning("Audio extraction failed for %s: %s", video.filename, e)
        raise ExtractionError(f"Failed to convert video to MP3: {e}") from e

    return ExtractedAudio(
        data=data,
        filename=audio_filename(video.filename),
        media_type=AUDIO_MEDIA_TYPE,
    )


def format_size(size: int) -> str:
    """Format a byte count in human-readable format."""
    value = float(size)
    for unit in ["B", "KB", "MB", "GB"]:
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"
