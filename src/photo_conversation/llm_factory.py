import logging
from typing import Optional

import httpx

from .config import PhotoConversationConfig
from .config_validator import is_placeholder, mask_secret
from .tools.gemini_conversation_tool import GeminiConversationTool

logger = logging.getLogger(__name__)


def create_conversation_tool(
    config: Optional[PhotoConversationConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> GeminiConversationTool:
    """
    Factory to return a ready-to-use conversation tool.

    A missing key is not an error: the tool then answers from its
    keyword rules only.

    :param config: PhotoConversationConfig instance (optional, uses defaults if not provided)
    :param client: Optional shared AsyncClient
    :return: Configured GeminiConversationTool instance
    """
    config = config or PhotoConversationConfig()
    api_key = config.conversation_api_key

    if config.enable_remote_conversation:
        if not api_key or is_placeholder(api_key):
            logger.warning("GEMINI_API_KEY not set; conversation openers will use keyword rules")
        else:
            logger.info(f"Conversation tool using key {mask_secret(api_key)}")

    return GeminiConversationTool(
        api_url=config.conversation_api_url,
        api_key=api_key,
        timeout=config.request_timeout_seconds,
        enabled=config.enable_remote_conversation,
        client=client,
    )
