"""
Configuration validation utilities.

Environment lookups with placeholder detection, so that template values such as
"Replace with your own API key" never reach a remote service.
"""
import os
import warnings
from typing import Optional
from .exceptions import ConfigurationError

# A value is a placeholder if it starts with one of these (case-insensitive)
PLACEHOLDER_PREFIXES = (
    "your_",
    "your-",
    "your own",
    "replace with",
    "replace_me",
    "hf_0000",
    "<",
)

# ...or is exactly one of these
PLACEHOLDER_VALUES = {
    "todo",
    "changeme",
    "placeholder",
    "none",
    "null",
}


def get_optional_env(
    key: str,
    default: Optional[str] = None,
    check_placeholder: bool = True,
) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :param check_placeholder: Treat template values as unset (for secrets)
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if check_placeholder and value and is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value


def get_bool_env(key: str, default: bool) -> bool:
    """Read a true/false flag from the environment."""
    value = get_optional_env(key, "true" if default else "false", check_placeholder=False)
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def validate_timeout(value: str, key_name: str) -> float:
    """
    Parse and bound a request timeout in seconds.

    :raises: ConfigurationError if not a positive number
    """
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key_name} must be a number of seconds, got {value!r}")

    if timeout <= 0:
        raise ConfigurationError(f"{key_name} must be positive, got {timeout}")

    return timeout


def is_placeholder(value: Optional[str]) -> bool:
    """
    Check if a credential is a template value rather than a real key.

    Matches whole-value shapes only (a known prefix, an exact word, or a run
    of x's); real keys that merely contain such text are accepted.
    """
    if not value:
        return False

    value_lower = value.strip().lower()
    if not value_lower:
        return False

    if value_lower in PLACEHOLDER_VALUES:
        return True

    if value_lower.startswith(PLACEHOLDER_PREFIXES):
        return True

    return set(value_lower) == {"x"}


def mask_secret(secret: Optional[str], show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages and logs.

    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
