"""
vidhook.extract - Audio extraction from video files.

Checks whether the runtime can record audio, then records the audio track of
a selected video into an ``.mp3``-named artifact. Callers fall back to an
empty placeholder when extraction is unsupported or fails.
"""

from __future__ import annotations
