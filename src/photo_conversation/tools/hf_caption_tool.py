import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional

import httpx

from .caption_tool import CaptionTool  # protocol
from .fallbacks import fallback_caption
from ..config import DEFAULT_CAPTION_API_URL, DEFAULT_REQUEST_TIMEOUT
from ..config_validator import is_placeholder
from ..exceptions import ProviderError
from ..schemas import ImageRef, ProviderResult

logger = logging.getLogger(__name__)


class HuggingFaceCaptionTool(CaptionTool):
    """
    Concrete CaptionTool calling a hosted BLIP captioning endpoint.

    Separation of concerns:
    - Request assembly is separate from transport
    - Response parsing is separate from transport
    - Fallback captioning lives in tools.fallbacks

    Any failure on the remote path degrades to a metadata caption, so
    caption() always returns a usable result and never raises.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        enabled: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize captioning tool.

        :param api_url: Inference endpoint URL
        :param api_key: Bearer token for the endpoint
        :param timeout: Upper bound in seconds for one request
        :param enabled: If False, skip the remote call and always use the fallback
        :param client: Optional shared AsyncClient (dependency injection/testing)
        :param clock: Source of "now" for fallback captions
        """
        self.api_url = api_url or DEFAULT_CAPTION_API_URL
        self.api_key = api_key
        self.timeout = timeout
        self.enabled = enabled
        self._client = client
        self._clock = clock

    def _build_headers(self) -> dict:
        if not self.api_key or is_placeholder(self.api_key):
            raise ProviderError("Captioning API key is missing or a placeholder")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _build_payload(image_base64: str) -> dict:
        return {"inputs": {"image": image_base64}}

    async def _post(self, payload: dict, headers: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.api_url, json=payload, headers=headers)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.api_url, json=payload, headers=headers)

    @staticmethod
    def _parse_generated_text(data: Any) -> str:
        """
        Extract the first non-empty generated_text.

        Accepts either a list of objects or a single object.
        """
        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict):
                continue
            text = item.get("generated_text")
            if isinstance(text, str) and text.strip():
                return text.strip()

        raise ProviderError("Captioning response contained no generated_text")

    async def _generate_caption(self, image_base64: str) -> str:
        headers = self._build_headers()
        payload = self._build_payload(image_base64)

        response = await asyncio.wait_for(self._post(payload, headers), timeout=self.timeout)

        if not response.is_success:
            raise ProviderError(
                f"API error (captioning): {response.status_code} {response.text[:200]}"
            )

        data = response.json()
        logger.debug(f"Caption response: {data}")
        return self._parse_generated_text(data)

    async def caption(self, image_base64: str, image_ref: ImageRef) -> ProviderResult:
        """
        Caption an image.

        :param image_base64: Base64-encoded image bytes
        :param image_ref: Reference to the image (used by the fallback)
        :return: ProviderResult tagged PRIMARY or FALLBACK
        """
        if self.enabled:
            try:
                text = await self._generate_caption(image_base64)
                logger.info(f"Caption generated: {text}")
                return ProviderResult.primary(text)
            except Exception as e:
                logger.warning(
                    f"Captioning service failed ({type(e).__name__}: {e}), using fallback caption"
                )
        else:
            logger.info("Remote captioning disabled, using fallback caption")

        return ProviderResult.fallback(fallback_caption(image_ref, self._clock))
