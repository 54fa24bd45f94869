"""
File validation exceptions.
"""


class SecurityError(Exception):
    """Base exception for security violations."""

    pass


class FileValidationError(SecurityError):
    """Raised when file validation fails."""

    pass
