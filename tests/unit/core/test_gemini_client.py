"""Tests for the Gemini client wrapper."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from crop_claims.core.exceptions import APIClientError, APITimeoutError
from crop_claims.core.gemini_client import GeminiClient


def _client(max_retries=1, timeout=60) -> GeminiClient:
    with patch("crop_claims.core.gemini_client.genai.Client"):
        client = GeminiClient(api_key="test_gemini_key", max_retries=max_retries, timeout=timeout)
    client.client = MagicMock()
    client.client.aio.models.generate_content = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_generate_content_returns_text():
    client = _client()
    client.client.aio.models.generate_content.return_value = MagicMock(text='{"type": "Flood"}')

    result = await client.generate_content(
        contents=["prompt"],
        generation_config={"response_mime_type": "application/json", "temperature": 0.2},
    )

    assert result == '{"type": "Flood"}'
    config = client.client.aio.models.generate_content.call_args.kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert config.temperature == 0.2


@pytest.mark.asyncio
async def test_empty_response_returns_empty_string():
    client = _client()
    client.client.aio.models.generate_content.return_value = MagicMock(text=None)

    assert await client.generate_content(contents="prompt") == ""


@pytest.mark.asyncio
async def test_retries_then_raises():
    client = _client(max_retries=3)
    client.client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")

    with patch("crop_claims.core.gemini_client.asyncio.sleep", new=AsyncMock()):
        with pytest.raises(APIClientError):
            await client.generate_content(contents="prompt")

    assert client.client.aio.models.generate_content.await_count == 3


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error():
    client = _client(timeout=0.05)

    async def never_answers(**kwargs):
        await asyncio.sleep(5)

    client.client.aio.models.generate_content = never_answers

    with pytest.raises(APITimeoutError):
        await client.generate_content(contents="prompt")


def test_image_part():
    part = GeminiClient.image_part(b"\xff\xd8\xff", "image/png")
    assert part.inline_data.mime_type == "image/png"
