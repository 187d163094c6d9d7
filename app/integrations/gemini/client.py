"""
Gemini REST helpers: request payload construction and a single generateContent call.

The API key is attached both as the `x-goog-api-key` header and as the `key`
query parameter; different API versions accept one or the other.
Endpoint selection and retry policy live in app/detection/prober.py.
"""

import base64
import json
import logging
from typing import Any

import aiohttp

from app.integrations.gemini.prompts import get_instruction
from app.schemas.detection import MediaAsset

logger = logging.getLogger(__name__)


def build_payload(asset: MediaAsset) -> dict:
    """generateContent body: instruction text followed by the inline base64 media."""
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": get_instruction(asset.kind)},
                    {
                        "inline_data": {
                            "mime_type": asset.mime_type or "application/octet-stream",
                            "data": base64.b64encode(asset.data).decode("ascii"),
                        }
                    },
                ],
            }
        ]
    }


def _decode_body(raw: bytes) -> Any:
    """JSON when the body parses, else the text. Undecodable bytes become U+FFFD."""
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


async def post_generate_content(
    session: aiohttp.ClientSession,
    url: str,
    payload: dict,
    api_key: str,
    timeout_sec: float,
) -> tuple[int, Any]:
    """
    POSTs the payload to one candidate URL.

    Returns (status, body) for any HTTP response, whatever the status; the body
    is decoded JSON, or text when it is not JSON. Invalid UTF-8 never raises.
    Transport failures (timeouts, DNS, refused connections) propagate as
    aiohttp.ClientError / asyncio.TimeoutError.
    """
    async with session.post(
        url,
        json=payload,
        headers={"Content-Type": "application/json", "x-goog-api-key": api_key},
        params={"key": api_key},
        timeout=aiohttp.ClientTimeout(total=timeout_sec),
    ) as response:
        raw = await response.read()
        logger.debug(f"[GEMINI] POST {url} -> {response.status}")
        return response.status, _decode_body(raw)
