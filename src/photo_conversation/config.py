from dataclasses import dataclass
from typing import Optional


DEFAULT_CAPTION_API_URL = (
    "https://router.huggingface.co/hf-inference/models/Salesforce/blip-image-captioning-base"
)
DEFAULT_CONVERSATION_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
)

# Conversation sampling is fixed; providers read these, callers cannot override them
CONVERSATION_TEMPERATURE = 0.7
CONVERSATION_MAX_OUTPUT_TOKENS = 150

DEFAULT_REQUEST_TIMEOUT = 20.0


@dataclass
class PhotoConversationConfig:
    # Captioning (vision)
    caption_api_url: str = DEFAULT_CAPTION_API_URL
    caption_api_key: Optional[str] = None
    enable_remote_caption: bool = True

    # Conversation (LLM)
    conversation_api_url: str = DEFAULT_CONVERSATION_API_URL
    conversation_api_key: Optional[str] = None
    enable_remote_conversation: bool = True

    # Networking
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT

    # Logging
    log_level: str = "INFO"
