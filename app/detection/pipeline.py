"""
Top-level detection pipeline: public entry point for the /api/detect route.

`detect_media` runs one resolution cycle for one asset:
  1. candidate generation  (app/detection/candidates.py)
  2. sequential probing    (app/detection/prober.py)
  3. verdict normalization (app/detection/normalizer.py)
  4. outcome assembly      (app/detection/assembler.py)

Configuration arrives as an explicit GeminiConfig; nothing here reads the
environment.
"""

import logging

from app.config import GeminiConfig
from app.detection.assembler import assemble_outcome
from app.detection.candidates import build_candidates
from app.detection.errors import ConfigurationError, UnsupportedMediaError
from app.detection.normalizer import normalize_response
from app.detection.prober import probe_endpoints
from app.integrations.gemini.client import build_payload
from app.schemas.detection import DetectionOutcome, MediaAsset

logger = logging.getLogger(__name__)

SUPPORTED_KINDS = ("image", "video")


async def detect_media(asset: MediaAsset, config: GeminiConfig) -> DetectionOutcome:
    if not config.api_key:
        raise ConfigurationError("Gemini keys not configured on server")
    if asset.kind not in SUPPORTED_KINDS:
        raise UnsupportedMediaError(asset.mime_type)

    candidates = build_candidates(
        config.fallback_models,
        config.api_bases,
        preferred_model=config.preferred_model,
        override=config.endpoint_override,
    )
    logger.info(f"[DETECT] {asset.filename}: {len(candidates)} candidate endpoint(s), mime {asset.mime_type}")

    success = await probe_endpoints(
        candidates,
        build_payload(asset),
        config.api_key,
        request_timeout_sec=config.request_timeout_sec,
        budget_sec=config.probe_budget_sec,
    )

    verdict = normalize_response(success.body)
    return await assemble_outcome(asset, verdict, success.body, endpoint=success.candidate)
