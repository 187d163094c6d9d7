"""
Outcome assembly: verdict + request metadata → DetectionOutcome.

This is the only place a result is handed to the history store. Recording is
best-effort; whatever happens there, the outcome's verdict is unchanged.
"""

import asyncio
import logging
from typing import Any, Optional

from app.schemas.detection import DetectionOutcome, MediaAsset, Verdict
from app.services.history_service import record_detection

logger = logging.getLogger(__name__)


async def assemble_outcome(
    asset: MediaAsset,
    verdict: Optional[Verdict],
    raw_response: Any,
    endpoint: Optional[str] = None,
) -> DetectionOutcome:
    verdict = verdict or Verdict(label="Unknown", confidence=0.0)
    logger.info(f"[DETECT] {asset.filename} ({asset.kind}): {verdict.label} @ {verdict.confidence}")

    stored = await asyncio.to_thread(
        record_detection, asset.filename, verdict.label, verdict.confidence
    )

    return DetectionOutcome(
        filename=asset.filename,
        verdict=verdict,
        media_kind=asset.kind,
        raw_response=raw_response,
        endpoint=endpoint,
        id=stored.get("id") if stored else None,
        created_at=stored.get("created_at") if stored else None,
    )
