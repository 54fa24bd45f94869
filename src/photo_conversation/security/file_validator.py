"""
Image file validation.

OOP: Single Responsibility - Only handles file validation.
"""

from pathlib import Path
from typing import Tuple, Optional

from PIL import Image, UnidentifiedImageError

from .exceptions import FileValidationError


class FileValidator:
    """
    Validates picked image files before they enter a session.

    Checks extension, size and that Pillow can actually decode the content.
    """

    MAX_FILE_SIZE = 10 * 1024 * 1024
    MAX_DIMENSION = 10000
    ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"}
    ALLOWED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP", "BMP"}

    @staticmethod
    def validate_image_file(file_path: str) -> Tuple[bool, Optional[str]]:
        """
        Validate image file.

        :param file_path: Path to the file to validate
        :return: Tuple of (is_valid, error_message)
        """
        path = Path(file_path)

        if not path.is_file():
            return False, "File does not exist"

        if path.suffix.lower() not in FileValidator.ALLOWED_EXTENSIONS:
            allowed = ", ".join(sorted(FileValidator.ALLOWED_EXTENSIONS))
            return False, f"File extension '{path.suffix}' not allowed. Allowed: {allowed}"

        try:
            file_size = path.stat().st_size
        except OSError as e:
            return False, f"Cannot read file size: {str(e)}"

        if file_size > FileValidator.MAX_FILE_SIZE:
            return False, f"File size {file_size} bytes exceeds maximum {FileValidator.MAX_FILE_SIZE} bytes"

        if file_size == 0:
            return False, "File is empty"

        try:
            with Image.open(path) as img:
                detected_format = img.format
                img.verify()

            if detected_format not in FileValidator.ALLOWED_FORMATS:
                return False, f"Image type '{detected_format}' not allowed"

            with Image.open(path) as img:
                if img.width > FileValidator.MAX_DIMENSION or img.height > FileValidator.MAX_DIMENSION:
                    return False, f"Image dimensions too large (max {FileValidator.MAX_DIMENSION}x{FileValidator.MAX_DIMENSION})"

                if img.width == 0 or img.height == 0:
                    return False, "Image has invalid dimensions"

        except UnidentifiedImageError:
            return False, "File is not a valid image"
        except Exception as e:
            return False, f"Image validation failed: {str(e)}"

        return True, None

    @staticmethod
    def ensure_valid_image(file_path: str) -> str:
        """
        Validate and return the resolved path.

        :raises FileValidationError: If the file is not an acceptable image
        """
        is_valid, error = FileValidator.validate_image_file(file_path)
        if not is_valid:
            raise FileValidationError(error)
        return str(Path(file_path).resolve())
