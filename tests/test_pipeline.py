"""
Unit tests for app/detection/pipeline.py: detect_media().

Runs the whole resolution cycle (candidates → probe → normalize → assemble)
with only the single-call transport helper mocked.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from app.detection.errors import (
    ConfigurationError,
    UnsupportedMediaError,
    UpstreamAuthError,
    UpstreamExhaustedError,
)
from app.detection.pipeline import detect_media
from app.schemas.detection import MediaAsset
from tests.conftest import gemini_text_response, make_config


def _patch_post(*responses):
    return patch(
        "app.detection.prober.post_generate_content",
        new_callable=AsyncMock,
        side_effect=list(responses),
    )


async def test_missing_credential_fails_before_any_request(fake_session, image_asset):
    with _patch_post() as mock_post:
        with pytest.raises(ConfigurationError):
            await detect_media(image_asset, make_config(api_key=None))

    mock_post.assert_not_awaited()


async def test_unsupported_kind_is_rejected(fake_session):
    asset = MediaAsset.model_construct(data=b"x", kind="audio", mime_type="audio/mpeg", filename="a.mp3")
    with _patch_post() as mock_post:
        with pytest.raises(UnsupportedMediaError):
            await detect_media(asset, make_config())

    mock_post.assert_not_awaited()


async def test_successful_detection(fake_session, mock_supabase, image_asset):
    body = gemini_text_response('{"result": "Fake", "confidence": 0.87}')
    with _patch_post((200, body)) as mock_post:
        outcome = await detect_media(image_asset, make_config())

    assert outcome.filename == "photo.jpg"
    assert outcome.media_kind == "image"
    assert outcome.verdict.label == "Fake"
    assert outcome.verdict.confidence == 0.87
    assert outcome.raw_response == body
    assert outcome.endpoint == "https://api.test/v1beta/models/m1:generateContent"
    # Payload carries the image instruction and inline data
    payload = mock_post.await_args.args[2]
    assert payload["contents"][0]["parts"][1]["inline_data"]["mime_type"] == "image/jpeg"


async def test_override_endpoint_is_tried_first(fake_session, mock_supabase, video_asset):
    override = "https://proxy.internal/models/custom:generateContent"
    body = gemini_text_response('{"result": "Real", "confidence": 0.2}')
    with _patch_post((200, body)) as mock_post:
        outcome = await detect_media(video_asset, make_config(endpoint_override=override))

    assert mock_post.await_args.args[1] == override
    assert outcome.endpoint == override
    assert outcome.media_kind == "video"


async def test_unparseable_success_degrades_to_unknown(fake_session, mock_supabase, image_asset):
    body = gemini_text_response("Sorry, I can't determine that.")
    with _patch_post((200, body)):
        outcome = await detect_media(image_asset, make_config())

    assert outcome.verdict.label == "Unknown"
    assert outcome.verdict.confidence == 0.0
    assert outcome.raw_response == body


async def test_timeout_then_auth_failure(fake_session, image_asset):
    config = make_config(preferred_model=None, fallback_models=("m1", "m2"), api_bases=("v1", "v2"))
    with _patch_post(asyncio.TimeoutError(), (403, {"error": "PERMISSION_DENIED"}), (200, {})) as mock_post:
        with pytest.raises(UpstreamAuthError) as exc:
            await detect_media(image_asset, config)

    assert mock_post.await_count == 2
    assert exc.value.candidate == "v1/models/m1-latest:generateContent"
    assert exc.value.status == 403


async def test_all_candidates_fail(fake_session, image_asset):
    config = make_config(preferred_model=None, fallback_models=("m1-latest",), api_bases=("v1", "v2"))
    with _patch_post((404, "nf"), (500, "err")) as mock_post:
        with pytest.raises(UpstreamExhaustedError) as exc:
            await detect_media(image_asset, config)

    assert mock_post.await_count == 2
    assert [d["status"] for d in exc.value.details] == [404, 500]
