"""
Security module for validating picked image files.
"""

from .exceptions import SecurityError, FileValidationError
from .file_validator import FileValidator

__all__ = [
    "SecurityError",
    "FileValidationError",
    "FileValidator",
]
