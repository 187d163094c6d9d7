"""
Upload validation: size limit and media-kind classification.

The declared MIME type wins when it is image/* or video/*. When it is missing
or generic (application/octet-stream), the kind is inferred from the file
extension.
"""

import logging
import os
from typing import Optional

from fastapi import HTTPException

from app.config import settings
from app.detection.errors import UnsupportedMediaError

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = ("mp4", "mov", "webm", "m4v", "avi")
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "webp", "gif")

GENERIC_MIME_TYPES = ("", "application/octet-stream")


def validate_upload_size(filename: str, filesize: int) -> None:
    if filesize > settings.max_upload_bytes:
        logger.warning(f"[UPLOAD] {filename} rejected: {filesize} bytes")
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max {settings.max_upload_mb}MB allowed."
        )


def infer_mime_type(filename: Optional[str]) -> str:
    """image/<ext> or video/<ext> for known extensions, else ''."""
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if ext in VIDEO_EXTENSIONS:
        return f"video/{ext}"
    if ext in IMAGE_EXTENSIONS:
        return f"image/{ext}"
    return ""


def classify_media(filename: Optional[str], declared_mime: Optional[str]) -> tuple[str, str]:
    """
    Returns (media_kind, mime_type) where media_kind is 'image' or 'video'.
    Raises UnsupportedMediaError for anything else.
    """
    mime = (declared_mime or "").strip().lower()
    if mime in GENERIC_MIME_TYPES:
        mime = infer_mime_type(filename)

    if mime.startswith("image/"):
        return "image", mime
    if mime.startswith("video/"):
        return "video", mime

    logger.warning(f"[UPLOAD] unsupported mime for {filename}: {mime or 'unknown'}")
    raise UnsupportedMediaError(mime)
