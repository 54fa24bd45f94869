"""
Configuration loader with validation.

Builds PhotoConversationConfig from environment variables (and a local .env file).
"""
from dotenv import load_dotenv
from .config import (
    PhotoConversationConfig,
    DEFAULT_CAPTION_API_URL,
    DEFAULT_CONVERSATION_API_URL,
    DEFAULT_REQUEST_TIMEOUT,
)
from .config_validator import get_optional_env, get_bool_env, validate_timeout


def load_config_from_env(use_dotenv: bool = True) -> PhotoConversationConfig:
    """
    Load configuration from environment variables with validation.

    API keys are optional: when absent (or left as a placeholder) the
    corresponding provider skips the remote call and uses its local fallback.

    Usage:
        config = load_config_from_env()
        app = PhotoConversationApp(config)
        app.initialize()

    :param use_dotenv: Whether to read a .env file first (disable in production)
    :return: Validated PhotoConversationConfig instance
    :raises: ConfigurationError if a value is malformed
    """
    if use_dotenv:
        load_dotenv()

    return PhotoConversationConfig(
        caption_api_url=get_optional_env(
            "CAPTION_API_URL",
            default=DEFAULT_CAPTION_API_URL,
            check_placeholder=False
        ),
        caption_api_key=get_optional_env("HF_API_KEY"),
        enable_remote_caption=get_bool_env("ENABLE_REMOTE_CAPTION", True),
        conversation_api_url=get_optional_env(
            "CONVERSATION_API_URL",
            default=DEFAULT_CONVERSATION_API_URL,
            check_placeholder=False
        ),
        conversation_api_key=get_optional_env("GEMINI_API_KEY"),
        enable_remote_conversation=get_bool_env("ENABLE_REMOTE_CONVERSATION", True),
        request_timeout_seconds=validate_timeout(
            get_optional_env(
                "REQUEST_TIMEOUT_SECONDS",
                str(DEFAULT_REQUEST_TIMEOUT),
                check_placeholder=False
            ),
            "REQUEST_TIMEOUT_SECONDS"
        ),
        log_level=get_optional_env("LOG_LEVEL", "INFO", check_placeholder=False).upper(),
    )


def create_config_for_production() -> PhotoConversationConfig:
    """
    Create configuration for production deployment.

    Environment variables only; no .env file loading.
    """
    return load_config_from_env(use_dotenv=False)
