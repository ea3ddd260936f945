"""
vidhook.upload - Webhook submission.

Packages the user's details, the original video and the derived audio into a
single multipart POST.
"""

from __future__ import annotations
