"""
Tests for the Hugging Face captioning tool.
HTTP is faked with httpx.MockTransport.
"""
import asyncio
import json
from datetime import datetime

import httpx
import pytest

from photo_conversation.schemas import ImageRef, ResultSource
from photo_conversation.tools.fallbacks import GALLERY_CAPTION
from photo_conversation.tools.hf_caption_tool import HuggingFaceCaptionTool

API_URL = "https://captions.test/models/blip"
API_KEY = "hf_live_token_123456"
DATED_CAPTION = "An image captured on 10/19/2026 at 3:04:05 PM"


def fixed_clock():
    return datetime(2026, 10, 19, 15, 4, 5)


def run_caption(handler, image_ref=None, **tool_kwargs):
    """Run one caption() call against a mocked endpoint."""
    image_ref = image_ref or ImageRef(uri="/photos/shot.png")
    tool_kwargs.setdefault("api_key", API_KEY)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            tool = HuggingFaceCaptionTool(
                api_url=API_URL,
                client=client,
                clock=fixed_clock,
                **tool_kwargs,
            )
            return await tool.caption("aW1hZ2UtYnl0ZXM=", image_ref)

    return asyncio.run(scenario())


class TestPrimaryPath:
    """Tests for successful remote captioning."""

    def test_sends_bearer_token_and_base64_payload(self):
        """Test the request carries a Bearer token and the base64 image."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[{"generated_text": "a dog on a beach"}])

        result = run_caption(handler)

        assert seen["method"] == "POST"
        assert seen["url"] == API_URL
        assert seen["auth"] == f"Bearer {API_KEY}"
        assert seen["body"] == {"inputs": {"image": "aW1hZ2UtYnl0ZXM="}}
        assert result.text == "a dog on a beach"
        assert result.source == ResultSource.PRIMARY

    def test_accepts_single_object_response(self):
        """Test a single-object response is accepted."""
        result = run_caption(lambda request: httpx.Response(200, json={"generated_text": "a cat"}))
        assert result.text == "a cat"
        assert result.source == ResultSource.PRIMARY

    def test_takes_first_non_empty_generated_text(self):
        """Test the first non-empty generated_text wins."""
        payload = [{"generated_text": ""}, {"other": 1}, {"generated_text": "two people"}]
        result = run_caption(lambda request: httpx.Response(200, json=payload))
        assert result.text == "two people"

    def test_key_containing_template_text_is_used(self):
        """Test a real key containing 'xXx' still reaches the endpoint."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[{"generated_text": "a dog"}])

        key = "hf_aBxXxQ7rT2mN9pLkZ3vW8sYcD4fGhJ6e"
        result = run_caption(handler, api_key=key)

        assert len(calls) == 1
        assert calls[0].headers["Authorization"] == f"Bearer {key}"
        assert result.text == "a dog"
        assert result.source == ResultSource.PRIMARY

    def test_any_2xx_is_success(self):
        """Test any 2xx status counts as success."""
        result = run_caption(lambda request: httpx.Response(201, json={"generated_text": "a meal"}))
        assert result.text == "a meal"


class TestFallbackPath:
    """Tests for degradation to metadata captions."""

    def test_http_500_on_png_gives_dated_caption(self):
        """Test a server error on a .png gives the dated caption."""
        result = run_caption(lambda request: httpx.Response(500, text="model loading"))
        assert result.text == DATED_CAPTION
        assert result.source == ResultSource.FALLBACK

    def test_http_error_on_unknown_extension_gives_gallery_caption(self):
        """Test a server error on other files gives the gallery caption."""
        result = run_caption(
            lambda request: httpx.Response(503),
            image_ref=ImageRef(uri="/photos/shot.heic"),
        )
        assert result.text == GALLERY_CAPTION

    def test_unparseable_body_falls_back(self):
        """Test a non-JSON body falls back."""
        result = run_caption(lambda request: httpx.Response(200, text="<html>oops</html>"))
        assert result.text == DATED_CAPTION

    @pytest.mark.parametrize("payload", [[], {}, [{"generated_text": "   "}], {"generated_text": None}, "text"])
    def test_empty_generated_text_falls_back(self, payload):
        """Test empty or missing generated_text falls back."""
        result = run_caption(lambda request: httpx.Response(200, json=payload))
        assert result.source == ResultSource.FALLBACK
        assert result.text == DATED_CAPTION

    def test_unreachable_endpoint_falls_back(self):
        """Test a connection error falls back."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = run_caption(handler)
        assert result.text == DATED_CAPTION

    def test_slow_endpoint_times_out_and_falls_back(self):
        """Test a slow endpoint is cut off by the timeout."""
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json={"generated_text": "too late"})

        result = run_caption(handler, timeout=0.05)
        assert result.text == DATED_CAPTION
        assert result.source == ResultSource.FALLBACK

    @pytest.mark.parametrize("api_key", [None, "", "Replace with your own API key"])
    def test_missing_or_placeholder_key_skips_request(self, api_key):
        """Test no request is made without a usable key."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"generated_text": "should not be used"})

        result = run_caption(handler, api_key=api_key)
        assert calls == []
        assert result.text == DATED_CAPTION

    def test_disabled_tool_never_calls_remote(self):
        """Test a disabled tool never calls the endpoint."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"generated_text": "x"})

        result = run_caption(handler, enabled=False)
        assert calls == []
        assert result.source == ResultSource.FALLBACK

    def test_caption_is_never_empty(self):
        """Test every status yields a non-empty caption."""
        for status in (200, 400, 401, 404, 429, 500):
            result = run_caption(lambda request, s=status: httpx.Response(s, json={}))
            assert result.text
