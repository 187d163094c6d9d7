"""
Sequential endpoint probing.

Candidates are tried one at a time, in order, with the same payload:
  - 2xx        → success, stop immediately (later candidates are never called)
  - 401 / 403  → the credential is bad; record and stop
  - anything else, or a transport error → record and move on

An optional time budget bounds the whole loop. Each call's timeout is capped
by whatever is left of it, and once it runs out the remaining candidates are
abandoned.
"""

import asyncio
import logging
import time
from typing import Iterable, Optional

import aiohttp

from app.detection.errors import UpstreamAuthError, UpstreamExhaustedError
from app.integrations import http_client as http_module
from app.integrations.gemini.client import post_generate_content
from app.schemas.detection import ProbeAttempt

logger = logging.getLogger(__name__)

AUTH_FAILURE_STATUSES = (401, 403)


def _is_success(status: int) -> bool:
    return 200 <= status < 300


async def probe_endpoints(
    candidates: Iterable[str],
    payload: dict,
    api_key: str,
    request_timeout_sec: float = 60.0,
    budget_sec: Optional[float] = None,
) -> ProbeAttempt:
    """
    Returns the first successful ProbeAttempt.

    Raises UpstreamAuthError on a 401/403, UpstreamExhaustedError when every
    candidate failed or the budget ran out. Both carry every failed attempt.
    """
    failures: list[ProbeAttempt] = []
    started = time.monotonic()

    async with http_module.request_session() as session:
        for url in candidates:
            timeout = request_timeout_sec
            if budget_sec is not None:
                remaining = budget_sec - (time.monotonic() - started)
                if remaining <= 0:
                    logger.warning(
                        f"[PROBE] Time budget of {budget_sec:.1f}s exhausted after "
                        f"{len(failures)} attempt(s); abandoning remaining candidates"
                    )
                    raise UpstreamExhaustedError(failures, budget_exceeded=True)
                timeout = min(timeout, remaining)

            try:
                status, body = await post_generate_content(session, url, payload, api_key, timeout)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                message = str(e) or type(e).__name__
                logger.warning(f"[PROBE] {url} transport error: {message}")
                failures.append(ProbeAttempt(candidate=url, outcome="transport_error", error=message))
                continue

            if _is_success(status):
                logger.info(f"[PROBE] Using endpoint {url} (after {len(failures)} failure(s))")
                return ProbeAttempt(candidate=url, outcome="success", status=status, body=body)

            if status in AUTH_FAILURE_STATUSES:
                logger.error(f"[PROBE] {url} rejected credential with {status}; stopping")
                failures.append(ProbeAttempt(candidate=url, outcome="hard_failure", status=status, body=body))
                raise UpstreamAuthError(failures)

            logger.info(f"[PROBE] {url} returned {status}; trying next candidate")
            failures.append(ProbeAttempt(candidate=url, outcome="soft_failure", status=status, body=body))

    raise UpstreamExhaustedError(failures)
