# src/photo_conversation/caption_factory.py
import logging
from typing import Optional

import httpx

from .tools.hf_caption_tool import HuggingFaceCaptionTool
from .config import PhotoConversationConfig
from .config_validator import is_placeholder

logger = logging.getLogger(__name__)


def create_caption_tool(
    config: Optional[PhotoConversationConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> HuggingFaceCaptionTool:
    """
    Factory function to create a configured HuggingFaceCaptionTool instance.

    :param config: PhotoConversationConfig instance (optional, uses defaults if not provided)
    :param client: Optional shared AsyncClient
    :return: Configured HuggingFaceCaptionTool instance
    """
    config = config or PhotoConversationConfig()

    if config.enable_remote_caption and (
        not config.caption_api_key or is_placeholder(config.caption_api_key)
    ):
        logger.warning("HF_API_KEY not set; captions will come from file metadata")

    return HuggingFaceCaptionTool(
        api_url=config.caption_api_url,
        api_key=config.caption_api_key,
        timeout=config.request_timeout_seconds,
        enabled=config.enable_remote_caption,
        client=client,
    )
