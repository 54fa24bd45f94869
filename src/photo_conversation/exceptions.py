class PhotoConversationError(Exception):
    """Base exception for photo conversation service."""


class ConfigurationError(PhotoConversationError):
    """Raised when required configuration is missing or invalid."""


class PermissionDeniedError(PhotoConversationError):
    """Raised when the user refuses camera or gallery access."""

    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice


class ImageAcquisitionError(PhotoConversationError):
    """Raised when the image picker or camera fails to deliver an image."""


class ImageReadError(PhotoConversationError):
    """Raised when the selected image cannot be read from disk."""


class ProviderError(PhotoConversationError):
    """Raised inside a provider when the remote service gives no usable result."""


class ToolNotInitializedError(PhotoConversationError):
    """Raised when the pipeline is used before its tools are injected."""
