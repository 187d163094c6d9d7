"""
Verdict extraction from Gemini responses.

The response shape is not fixed (API version, content wrappers, models that
wrap their JSON in prose), so extraction runs an ordered list of strategies
and stops at the first one that finds a `{result, confidence}` object:

  1. KnownContainerStrategy: well-known top-level list/text fields, including
     the AI Studio shape candidates[].content.parts[].text
  2. EmbeddedJsonStrategy: regex over the whole serialized body
  3. fallback: Verdict(Unknown, 0); normalization never raises

Labels are canonicalized here, once, by exact match, and an Unknown label always
scores 0. Other confidences are coerced to a finite float but not clamped or
rescaled.
"""

import json
import logging
import math
import re
from typing import Any, Iterable, Optional

from app.schemas.detection import Verdict

logger = logging.getLogger(__name__)

KNOWN_CONTAINER_FIELDS = ("predictions", "outputs", "results", "response", "output", "candidates")
ELEMENT_TEXT_FIELDS = ("text", "content", "output")

# Tolerates the \" escaping left behind when the verdict sits inside a JSON string.
EMBEDDED_VERDICT_RE = re.compile(
    r'\{[^{}]*\\?"result\\?"\s*:\s*\\?"(Real|Fake)\\?"'
    r'[^{}]*\\?"confidence\\?"\s*:\s*([0-9.]+)[^{}]*\}',
    re.IGNORECASE,
)


def try_extract_json(text: str) -> Any:
    """
    Parses text as JSON; on failure retries on the span between the first '{'
    and the last '}'. Returns None when neither parses.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            return None
    return None


def coerce_confidence(value: Any) -> float:
    """Finite float, or 0.0 for anything missing or non-numeric."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def canonical_label(raw_label: Any) -> str:
    """Exactly "real" or "fake", ignoring case and surrounding whitespace; else Unknown."""
    label = str(raw_label).strip().casefold()
    if label == "fake":
        return "Fake"
    if label == "real":
        return "Real"
    return "Unknown"


def verdict_from_object(obj: Any) -> Optional[Verdict]:
    """A Verdict when obj is a dict with a non-empty `result`, else None."""
    if not isinstance(obj, dict) or not obj.get("result"):
        return None
    raw_label = obj["result"]
    label = canonical_label(raw_label)
    # an Unknown verdict never carries the provider's confidence
    confidence = coerce_confidence(obj.get("confidence")) if label != "Unknown" else 0.0
    return Verdict(label=label, confidence=confidence, provider_label=str(raw_label))


def _verdict_from_text(text: Any) -> Optional[Verdict]:
    if not isinstance(text, str):
        return None
    return verdict_from_object(try_extract_json(text))


class ExtractionStrategy:
    name = "base"

    def try_extract(self, body: Any) -> Optional[Verdict]:
        raise NotImplementedError


class KnownContainerStrategy(ExtractionStrategy):
    name = "known_containers"

    def __init__(self, fields: Iterable[str] = KNOWN_CONTAINER_FIELDS):
        self.fields = tuple(fields)

    def try_extract(self, body: Any) -> Optional[Verdict]:
        if not isinstance(body, dict):
            return None

        for field in self.fields:
            if field not in body:
                continue
            value = body[field]
            if isinstance(value, list):
                for element in value:
                    verdict = self._from_element(element)
                    if verdict is not None:
                        return verdict
            elif isinstance(value, str):
                verdict = _verdict_from_text(value)
                if verdict is not None:
                    return verdict
        return None

    def _from_element(self, element: Any) -> Optional[Verdict]:
        if isinstance(element, str):
            return _verdict_from_text(element)
        if not isinstance(element, dict):
            return None

        content = element.get("content")
        if isinstance(content, dict) and isinstance(content.get("parts"), list):
            for part in content["parts"]:
                if isinstance(part, dict):
                    verdict = _verdict_from_text(part.get("text"))
                    if verdict is not None:
                        return verdict

        # First truthy text-ish field only; an object here is not searched further.
        text = next((element[f] for f in ELEMENT_TEXT_FIELDS if element.get(f)), None)
        return _verdict_from_text(text)


class EmbeddedJsonStrategy(ExtractionStrategy):
    name = "embedded_json"

    def try_extract(self, body: Any) -> Optional[Verdict]:
        try:
            serialized = json.dumps(body)
        except (TypeError, ValueError):
            return None

        match = EMBEDDED_VERDICT_RE.search(serialized)
        if not match:
            return None

        fragment = match.group(0).replace("\\n", "").replace('\\"', '"')
        return verdict_from_object(try_extract_json(fragment))


DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    KnownContainerStrategy(),
    EmbeddedJsonStrategy(),
)


def normalize_response(
    body: Any,
    strategies: Iterable[ExtractionStrategy] = DEFAULT_STRATEGIES,
) -> Verdict:
    """Runs each strategy in order; Verdict(Unknown, 0) when none matches."""
    for strategy in strategies:
        verdict = strategy.try_extract(body)
        if verdict is not None:
            logger.info(
                f"[NORMALIZE] {strategy.name}: {verdict.label} "
                f"(provider said {verdict.provider_label!r}, confidence {verdict.confidence})"
            )
            if not 0.0 <= verdict.confidence <= 1.0:
                logger.warning(f"[NORMALIZE] Confidence {verdict.confidence} outside 0-1; passed through")
            return verdict

    logger.warning("[NORMALIZE] No verdict found in provider response; returning Unknown")
    return Verdict(label="Unknown", confidence=0.0)
