"""
Shared pytest fixtures for all test modules.

Real Gemini and Supabase calls never happen in tests: the prober's transport
helper is patched per test and Supabase is replaced with MockSupabase.
"""

import os

# Settings are read once at import; keep a developer's .env from leaking in.
os.environ.setdefault("GEMINI_API_KEY", "stub-key-for-tests")
os.environ["SUPABASE_ENABLE"] = "false"

from contextlib import asynccontextmanager
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from tests.mocks.supabase_mock import MockSupabase

from app.config import GeminiConfig  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.detection import MediaAsset  # noqa: E402


# ---------------------------------------------------------------------------
# Core infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_supabase(monkeypatch):
    """Replace supabase_client.client with an in-memory MockSupabase."""
    from app.integrations import supabase_client as sc

    mock_sb = MockSupabase()
    monkeypatch.setattr(sc, "client", mock_sb)
    return mock_sb


@pytest.fixture
def recording_enabled(monkeypatch):
    """Turn on history recording for the duration of a test."""
    from app.config import settings

    monkeypatch.setattr(settings, "supabase_enable", True)


@pytest.fixture
def client(mock_supabase):
    """
    FastAPI TestClient with mocked Supabase.

    supabase_client.initialize() is patched to a no-op so it can't overwrite
    the mock or attempt a real connection during lifespan startup.
    """
    with patch("app.integrations.supabase_client.initialize"):
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c


@pytest.fixture
def fake_session():
    """
    Patches http_client.request_session to yield a MagicMock session, so the
    prober never builds a real aiohttp.ClientSession.
    """
    session = MagicMock(name="session")

    @asynccontextmanager
    async def _fake_request_session():
        yield session

    with patch(
        "app.integrations.http_client.request_session",
        side_effect=_fake_request_session,
    ):
        yield session


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


def gemini_text_response(text: str) -> dict:
    """AI Studio generateContent response carrying `text` as the single part."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 258, "candidatesTokenCount": 12},
    }


def make_config(**overrides) -> GeminiConfig:
    values = {
        "api_key": "test-key",
        "preferred_model": "m1",
        "fallback_models": ("m1", "m2"),
        "api_bases": ("https://api.test/v1beta", "https://api.test/v1"),
        "request_timeout_sec": 5.0,
        "probe_budget_sec": None,
    }
    values.update(overrides)
    return GeminiConfig(**values)


@pytest.fixture
def image_asset() -> MediaAsset:
    return MediaAsset(data=b"\xff\xd8\xff\xe0fakejpeg", kind="image", mime_type="image/jpeg", filename="photo.jpg")


@pytest.fixture
def video_asset() -> MediaAsset:
    return MediaAsset(data=b"\x00\x00\x00\x18ftypmp42", kind="video", mime_type="video/mp4", filename="clip.mp4")
