"""
Candidate endpoint generation for the Gemini generateContent API.

Pure and deterministic: the same inputs always give the same ordered list.
"""

from typing import Iterable, Optional

LATEST_SUFFIX = "-latest"


def _model_order(preferred_model: Optional[str], models: Iterable[str]) -> list[str]:
    ordered = [preferred_model] if preferred_model else []
    ordered.extend(m for m in models if m)
    return ordered


def build_candidates(
    models: Iterable[str],
    api_bases: Iterable[str],
    preferred_model: Optional[str] = None,
    override: Optional[str] = None,
) -> list[str]:
    """
    Builds the ordered, de-duplicated list of generateContent URLs to probe.

    Order: override (if any), then for each base the preferred model followed by
    the fallback models, each immediately followed by its `-latest` variant.
    """
    model_order = _model_order(preferred_model, models)

    candidates = [override] if override else []
    for base in api_bases:
        base = base.rstrip("/")
        for model in model_order:
            candidates.append(f"{base}/models/{model}:generateContent")
            if not model.endswith(LATEST_SUFFIX):
                candidates.append(f"{base}/models/{model}{LATEST_SUFFIX}:generateContent")

    # dict preserves first-seen order
    return list(dict.fromkeys(candidates))
