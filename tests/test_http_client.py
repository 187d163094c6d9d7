"""
Unit tests for app/integrations/http_client.py: shared session lifecycle and
the temporary-session fallback.
"""

from app.config import settings
from app.integrations import http_client


async def test_shared_session_uses_gemini_timeout_and_is_reused():
    await http_client.initialize()
    try:
        shared = http_client.session
        assert shared.timeout.total == settings.gemini_request_timeout_sec

        async with http_client.request_session() as sess:
            assert sess is shared
        assert not shared.closed
    finally:
        await http_client.close()

    assert http_client.session is None
    assert shared.closed


async def test_request_session_without_startup_closes_temporary_session(monkeypatch):
    monkeypatch.setattr(http_client, "session", None)

    async with http_client.request_session() as sess:
        assert not sess.closed
        assert sess.timeout.total == settings.gemini_request_timeout_sec

    assert sess.closed
