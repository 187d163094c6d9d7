"""
Detection route: /api/detect

Accepts multipart/form-data with a single 'file' field (image or video).
Forwards the media to Gemini and returns the normalized verdict together with
the raw provider response.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.config import settings
from app.detection.errors import ConfigurationError, UnsupportedMediaError, UpstreamError
from app.detection.pipeline import detect_media
from app.schemas.detection import DetectionResponse
from app.services.detection_service import log_memory, read_media_asset

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Detection"])

UNSUPPORTED_MEDIA_MESSAGE = (
    "Unsupported file type. Please upload an image (JPG/PNG) or a video (MP4, MOV, WEBM)."
)


@router.post("/api/detect", response_model=DetectionResponse)
async def detect(file: Optional[UploadFile] = File(None)):
    """
    Detect deepfakes in an uploaded image or video.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    try:
        asset = await read_media_asset(file)
    except UnsupportedMediaError as e:
        raise HTTPException(
            status_code=415,
            detail={"error": UNSUPPORTED_MEDIA_MESSAGE, "mime": e.mime_type}
        )

    log_memory(f"Pre-Detect: {asset.filename}")

    try:
        outcome = await detect_media(asset, settings.gemini_config())
    except ConfigurationError as e:
        logger.error(f"[DETECT] {e}")
        raise HTTPException(status_code=500, detail={"error": str(e)})
    except UpstreamError as e:
        logger.error(f"[DETECT] Gemini proxy error for {asset.filename}: {e}")
        raise HTTPException(
            status_code=502,
            detail={
                "error": "Gemini proxy error",
                "message": str(e),
                "status": e.attempts[-1].status if e.attempts else None,
                "details": e.details,
            }
        )

    log_memory(f"Post-Detect: {asset.filename}")

    return DetectionResponse(
        filename=outcome.filename,
        result=outcome.verdict.label,
        confidence=outcome.verdict.confidence,
        provider_label=outcome.verdict.provider_label,
        file_type=outcome.media_kind,
        raw=outcome.raw_response,
        id=outcome.id,
        created_at=outcome.created_at,
    )
