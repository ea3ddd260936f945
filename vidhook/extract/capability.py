"""
vidhook.extract.capability - Runtime support checks for audio extraction.

Extraction needs ffprobe to read media metadata, ffmpeg to record the audio
track, and an ffmpeg build that can encode the recording codec and write the
recording container.
"""

from __future__ import annotations

import shutil
import subprocess
from functools import lru_cache
from typing import Any

from vidhook.exceptions import DependencyError
from vidhook.logging import logger

INSTALL_HINT = "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)"


def _list_ffmpeg(ffmpeg_path: str, listing: str) -> str:
    """Return the output of `ffmpeg -encoders` / `ffmpeg -muxers`, or "" on failure."""
    try:
        proc = subprocess.run(
            [ffmpeg_path, "-hide_banner", f"-{listing}"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("ffmpeg -%s failed: %s", listing, e)
        return ""
    if proc.returncode != 0:
        logger.debug("ffmpeg -%s exited with %s", listing, proc.returncode)
        return ""
    return proc.stdout


def _listing_contains(listing: str, name: str) -> bool:
    """Check whether an ffmpeg listing has an entry with the given name.

    Entries look like `` A....D libopus   libopus Opus`` (encoders) or
    ``  E webm            WebM`` (muxers); the name is the second column.
    """
    for line in listing.splitlines():
        parts = line.split()
        if len(parts) >= 2 and name in parts[1].split(","):
            return True
    return False


def _ffmpeg_version(ffmpeg_path: str) -> str:
    try:
        proc = subprocess.run(
            [ffmpeg_path, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        return version_line.split()[2] if version_line else "unknown"
    except (OSError, subprocess.TimeoutExpired, IndexError):
        return "unknown"


def probe_capabilities(codec: str = "libopus", container: str = "webm") -> dict[str, Any]:
    """Report which extraction prerequisites the runtime provides.

    Args:
        codec: Audio encoder used for recording
        container: Output muxer used for recording

    Returns:
        Dict with binary paths, ffmpeg version, encoder/muxer availability,
        and 'supported'
    """
    ffmpeg_path = shutil.which("ffmpeg")
    ffprobe_path = shutil.which("ffprobe")

    report: dict[str, Any] = {
        "ffmpeg_path": ffmpeg_path,
        "ffprobe_path": ffprobe_path,
        "ffmpeg_version": None,
        "codec": codec,
        "container": container,
        "encoder_available": False,
        "muxer_available": False,
        "supported": False,
    }

    if ffmpeg_path:
        report["ffmpeg_version"] = _ffmpeg_version(ffmpeg_path)
        encoders = _list_ffmpeg(ffmpeg_path, "encoders")
        muxers = _list_ffmpeg(ffmpeg_path, "muxers")
        report["encoder_available"] = _listing_contains(encoders, codec)
        report["muxer_available"] = _listing_contains(muxers, container)

    report["supported"] = bool(
        ffmpeg_path and ffprobe_path and report["encoder_available"] and report["muxer_available"]
    )
    return report


@lru_cache(maxsize=8)
def is_media_conversion_supported(codec: str = "libopus", container: str = "webm") -> bool:
    """Check whether audio can be extracted in this environment.

    The answer is cached per process; call
    ``is_media_conversion_supported.cache_clear()`` to probe again.
    """
    supported = probe_capabilities(codec, container)["supported"]
    logger.debug("Media conversion supported (%s/%s): %s", codec, container, supported)
    return supported


def require_ffmpeg() -> None:
    """Raise DependencyError if ffmpeg or ffprobe is not on PATH."""
    for binary in ("ffmpeg", "ffprobe"):
        if not shutil.which(binary):
            raise DependencyError(binary, f"{binary} not found in PATH", INSTALL_HINT)
