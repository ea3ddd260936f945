"""
Vidhook - video & audio webhook uploader.

Collects a user's name, surname and email together with an MP4/MOV video,
extracts the audio track locally, and posts both files to a webhook:
validation → capability check → audio extraction → multipart upload.
"""

__version__ = "0.1.0"
