"""
Photo Conversation Service: caption a photo, open a conversation about it,
and record the user's reply.
"""
from .app import PhotoConversationApp
from .config import PhotoConversationConfig
from .config_loader import load_config_from_env

__all__ = ["PhotoConversationApp", "PhotoConversationConfig", "load_config_from_env"]
