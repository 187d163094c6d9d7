"""
Shared aiohttp ClientSession for the Gemini endpoint probes, opened and closed
in the FastAPI lifespan. Its default timeout is gemini_request_timeout_sec; the
prober narrows it per call when the probe time budget is running out.

request_session() falls back to a temporary session before startup.
"""

import logging
from contextlib import asynccontextmanager

import aiohttp

from app.config import settings

logger = logging.getLogger(__name__)

session: aiohttp.ClientSession | None = None


def _default_timeout() -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=settings.gemini_request_timeout_sec)


async def initialize() -> None:
    global session
    session = aiohttp.ClientSession(timeout=_default_timeout())
    logger.info("[STARTUP] Shared HTTP session initialized")


async def close() -> None:
    global session
    if session and not session.closed:
        await session.close()
        session = None
        logger.info("[SHUTDOWN] Shared HTTP session closed")


@asynccontextmanager
async def request_session():
    """
    Async context manager that yields the shared session if available,
    otherwise creates and closes a temporary one.

    Never closes the shared session; http_client.close() handles that.
    """
    global session
    if session and not session.closed:
        yield session
    else:
        tmp = aiohttp.ClientSession(timeout=_default_timeout())
        try:
            yield tmp
        finally:
            await tmp.close()
