from .caption_tool import CaptionTool
from .conversation_tool import ConversationTool
from .hf_caption_tool import HuggingFaceCaptionTool
from .gemini_conversation_tool import GeminiConversationTool
from .fallbacks import fallback_caption, default_opener

__all__ = [
    "CaptionTool",
    "ConversationTool",
    "HuggingFaceCaptionTool",
    "GeminiConversationTool",
    "fallback_caption",
    "default_opener",
]
