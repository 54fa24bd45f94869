"""
Tests for the Gemini conversation tool.
"""
import asyncio
import json

import httpx
import pytest

from photo_conversation.agent.prompts import build_conversation_prompt
from photo_conversation.config import CONVERSATION_MAX_OUTPUT_TOKENS, CONVERSATION_TEMPERATURE
from photo_conversation.schemas import ResultSource
from photo_conversation.tools.fallbacks import GENERIC_OPENER
from photo_conversation.tools.gemini_conversation_tool import GeminiConversationTool

API_URL = "https://gemini.test/v1beta/models/flash:generateContent"
API_KEY = "AIza_live_key_987654"
PET_OPENER = "What an adorable pet! What makes this moment special?"


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def run_converse(handler, caption="a dog sitting on a beach", **tool_kwargs):
    tool_kwargs.setdefault("api_key", API_KEY)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            tool = GeminiConversationTool(api_url=API_URL, client=client, **tool_kwargs)
            return await tool.converse(caption)

    return asyncio.run(scenario())


class TestPrompt:
    """Tests for the prompt template."""

    def test_prompt_embeds_caption(self):
        """Test the prompt quotes the caption."""
        prompt = build_conversation_prompt("a red kite")
        assert '"a red kite"' in prompt
        assert "1-2 sentences" in prompt

    def test_caption_with_braces_is_safe(self):
        """Test braces in a caption are kept literally."""
        prompt = build_conversation_prompt("a sign reading {hello}")
        assert "{hello}" in prompt


class TestPrimaryPath:
    """Tests for successful remote conversation."""

    def test_request_shape(self):
        """Test the key goes in the query string and the body is fixed."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["key"] = request.url.params.get("key")
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=gemini_body("Lovely! Who took it?"))

        run_converse(handler, caption="a kite")

        assert seen["method"] == "POST"
        assert seen["key"] == API_KEY
        assert seen["path"] == "/v1beta/models/flash:generateContent"
        assert seen["auth"] is None
        assert seen["body"] == {
            "contents": [{"parts": [{"text": build_conversation_prompt("a kite")}]}],
            "generationConfig": {
                "temperature": CONVERSATION_TEMPERATURE,
                "maxOutputTokens": CONVERSATION_MAX_OUTPUT_TOKENS,
            },
        }

    def test_sampling_constants(self):
        """Test temperature and max output tokens."""
        assert CONVERSATION_TEMPERATURE == 0.7
        assert CONVERSATION_MAX_OUTPUT_TOKENS == 150

    def test_returns_trimmed_first_candidate_text(self):
        """Test the first candidate's first part is used, trimmed."""
        body = {
            "candidates": [
                {"content": {"parts": [{"text": "  What a fun day! Where was this?\n"}, {"text": "ignored"}]}},
                {"content": {"parts": [{"text": "second candidate"}]}},
            ]
        }
        result = run_converse(lambda request: httpx.Response(200, json=body))
        assert result.text == "What a fun day! Where was this?"
        assert result.source == ResultSource.PRIMARY


    def test_key_containing_template_text_is_used(self):
        """Test a real key containing 'xxx' or 'todo' still reaches the endpoint."""
        keys = []

        def handler(request):
            keys.append(request.url.params.get("key"))
            return httpx.Response(200, json=gemini_body("Nice shot! Where was it?"))

        result = run_converse(handler, api_key="AIzaSyXxxTodo7rT2mN9pLkZ3vW8sYc")

        assert keys == ["AIzaSyXxxTodo7rT2mN9pLkZ3vW8sYc"]
        assert result.source == ResultSource.PRIMARY


class TestFallbackPath:
    """Tests for degradation to keyword-rule openers."""

    def test_unreachable_endpoint_uses_keyword_rules(self):
        """Test a connection error uses the keyword rules."""
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        result = run_converse(handler, caption="a dog sitting on a beach")
        assert result.text == PET_OPENER
        assert result.source == ResultSource.FALLBACK

    def test_non_2xx_uses_keyword_rules(self):
        """Test an error status uses the keyword rules."""
        result = run_converse(lambda request: httpx.Response(429, text="quota"), caption="a bowl of food")
        assert result.text == "That food looks delicious! What made this meal special?"

    @pytest.mark.parametrize("body", [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{}]}}]},
        gemini_body("   "),
        [],
    ])
    def test_missing_text_uses_keyword_rules(self, body):
        """Test a response without text uses the keyword rules."""
        result = run_converse(lambda request: httpx.Response(200, json=body), caption="a quiet street")
        assert result.text == GENERIC_OPENER
        assert result.source == ResultSource.FALLBACK

    def test_timeout_uses_keyword_rules(self):
        """Test a slow endpoint uses the keyword rules."""
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json=gemini_body("late"))

        result = run_converse(handler, caption="people at a party", timeout=0.05)
        assert result.text.startswith("What a wonderful moment with people!")

    def test_placeholder_key_skips_request(self):
        """Test a template key makes no request."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=gemini_body("unused"))

        result = run_converse(handler, api_key="Replace with your own API key")
        assert calls == []
        assert result.text == PET_OPENER

    def test_disabled_tool_never_calls_remote(self):
        """Test a disabled tool never calls the endpoint."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=gemini_body("unused"))

        result = run_converse(handler, enabled=False, caption="mountain at dawn")
        assert calls == []
        assert result.text == "What a beautiful view! What memories does this place hold for you?"
