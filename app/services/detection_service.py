"""
Detection request helpers: upload → MediaAsset conversion and memory usage logging.
"""

import logging
import os

import psutil
from fastapi import HTTPException, UploadFile

from app.core.file_validator import classify_media, validate_upload_size
from app.schemas.detection import MediaAsset

logger = logging.getLogger(__name__)


def log_memory(stage: str) -> None:
    """Log current process and system memory usage. Only runs when DEBUG logging is active."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    process = psutil.Process(os.getpid())
    mem_info = process.memory_info()
    sys_mem = psutil.virtual_memory()
    logger.debug(
        f"[MEMORY] {stage} | "
        f"PID: {os.getpid()} | "
        f"Process RSS: {mem_info.rss / 1024 / 1024:.2f} MB | "
        f"System Available: {sys_mem.available / 1024 / 1024:.2f} MB / {sys_mem.total / 1024 / 1024:.2f} MB"
    )


async def read_media_asset(upload: UploadFile) -> MediaAsset:
    """
    Reads an uploaded file into a MediaAsset.

    Raises HTTPException(413) for oversized uploads and UnsupportedMediaError
    when the file is neither an image nor a video.
    """
    filename = upload.filename or "uploaded_file"
    content = await upload.read()
    logger.info(
        f"[UPLOAD] received {filename} | mime: {upload.content_type or 'none'} | size: {len(content)}"
    )

    validate_upload_size(filename, len(content))
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    kind, mime_type = classify_media(filename, upload.content_type)
    return MediaAsset(data=content, kind=kind, mime_type=mime_type, filename=filename)
