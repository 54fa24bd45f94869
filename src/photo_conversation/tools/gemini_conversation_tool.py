import asyncio
import logging
from typing import Any, Optional

import httpx

from .conversation_tool import ConversationTool  # protocol
from .fallbacks import default_opener
from ..agent.prompts import build_conversation_prompt
from ..config import (
    CONVERSATION_MAX_OUTPUT_TOKENS,
    CONVERSATION_TEMPERATURE,
    DEFAULT_CONVERSATION_API_URL,
    DEFAULT_REQUEST_TIMEOUT,
)
from ..config_validator import is_placeholder
from ..exceptions import ProviderError
from ..schemas import ProviderResult

logger = logging.getLogger(__name__)


class GeminiConversationTool(ConversationTool):
    """
    Concrete ConversationTool calling the Gemini generateContent endpoint.

    The prompt template and sampling settings are fixed. Any failure on the
    remote path degrades to a keyword-rule opener; converse() never raises.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        enabled: bool = True,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        :param api_url: generateContent endpoint URL (key is passed as ?key=)
        :param api_key: API key for the endpoint
        :param timeout: Upper bound in seconds for one request
        :param enabled: If False, skip the remote call and always use the fallback
        :param client: Optional shared AsyncClient (dependency injection/testing)
        """
        self.api_url = api_url or DEFAULT_CONVERSATION_API_URL
        self.api_key = api_key
        self.timeout = timeout
        self.enabled = enabled
        self._client = client

    def _build_params(self) -> dict:
        if not self.api_key or is_placeholder(self.api_key):
            raise ProviderError("Conversation API key is missing or a placeholder")
        return {"key": self.api_key}

    @staticmethod
    def _build_payload(caption: str) -> dict:
        return {
            "contents": [
                {"parts": [{"text": build_conversation_prompt(caption)}]}
            ],
            "generationConfig": {
                "temperature": CONVERSATION_TEMPERATURE,
                "maxOutputTokens": CONVERSATION_MAX_OUTPUT_TOKENS,
            },
        }

    async def _post(self, payload: dict, params: dict) -> httpx.Response:
        headers = {"Content-Type": "application/json"}
        if self._client is not None:
            return await self._client.post(
                self.api_url, json=payload, params=params, headers=headers
            )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.api_url, json=payload, params=params, headers=headers)

    @staticmethod
    def _parse_text(data: Any) -> str:
        """Read candidates[0].content.parts[0].text."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError("No valid response from Gemini API")

        if not isinstance(text, str) or not text.strip():
            raise ProviderError("Gemini API returned empty text")

        return text.strip()

    async def _generate_conversation(self, caption: str) -> str:
        params = self._build_params()
        payload = self._build_payload(caption)

        response = await asyncio.wait_for(self._post(payload, params), timeout=self.timeout)

        if not response.is_success:
            raise ProviderError(
                f"Gemini API error: {response.status_code} {response.text[:200]}"
            )

        data = response.json()
        logger.debug(f"Gemini API response: {data}")
        return self._parse_text(data)

    async def converse(self, caption: str) -> ProviderResult:
        """
        Turn a caption into a short conversational opener.

        :param caption: Caption produced for the current image
        :return: ProviderResult tagged PRIMARY or FALLBACK
        """
        if self.enabled:
            try:
                text = await self._generate_conversation(caption)
                logger.info(f"Conversation opener generated ({len(text)} chars)")
                return ProviderResult.primary(text)
            except Exception as e:
                logger.warning(
                    f"Conversation service failed ({type(e).__name__}: {e}), using default opener"
                )
        else:
            logger.info("Remote conversation disabled, using default opener")

        return ProviderResult.fallback(default_opener(caption))
