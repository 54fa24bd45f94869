"""
Image acquisition and reading.

Thin adapters around the picker/camera and the file system. The pickers
themselves live in the front-end (Gradio upload, CLI argument, ...); this
module only applies the permission check, validates what was picked and
reads the bytes.
"""
import asyncio
import base64
import inspect
import logging
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional, Protocol, Union

from ..exceptions import ImageAcquisitionError, ImageReadError, PermissionDeniedError
from ..schemas import ImageRef
from ..security import FileValidationError, FileValidator

logger = logging.getLogger(__name__)

Picker = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]


class ImageSourceKind(str, Enum):
    GALLERY = "gallery"
    CAMERA = "camera"


PERMISSION_NOTICES = {
    ImageSourceKind.GALLERY: "Sorry, we need camera roll permissions to make this work!",
    ImageSourceKind.CAMERA: "Sorry, we need camera permissions to make this work!",
}

ACQUISITION_ERROR_PREFIXES = {
    ImageSourceKind.GALLERY: "Failed to pick image",
    ImageSourceKind.CAMERA: "Failed to take photo",
}


class PermissionGate(Protocol):
    """Asks the platform for access to a source."""
    async def request(self, kind: ImageSourceKind) -> bool:
        ...


class GrantedPermissions:
    """Permission gate for environments without a permission prompt."""

    async def request(self, kind: ImageSourceKind) -> bool:
        return True


class ImageSource(Protocol):
    """Supplies an ImageRef, or None when the user cancels."""
    async def select_from_gallery(self) -> Optional[ImageRef]:
        ...

    async def capture_from_camera(self) -> Optional[ImageRef]:
        ...


class LocalImageSource:
    """
    ImageSource over local files.

    Each picker returns a file path, or None/"" when the user cancels.
    Pickers may be plain or async callables.
    """

    def __init__(
        self,
        gallery_picker: Optional[Picker] = None,
        camera_picker: Optional[Picker] = None,
        permissions: Optional[PermissionGate] = None,
    ):
        self._pickers = {
            ImageSourceKind.GALLERY: gallery_picker,
            ImageSourceKind.CAMERA: camera_picker,
        }
        self._permissions = permissions or GrantedPermissions()

    async def select_from_gallery(self) -> Optional[ImageRef]:
        return await self._acquire(ImageSourceKind.GALLERY)

    async def capture_from_camera(self) -> Optional[ImageRef]:
        return await self._acquire(ImageSourceKind.CAMERA)

    async def _acquire(self, kind: ImageSourceKind) -> Optional[ImageRef]:
        """
        :raises PermissionDeniedError: Permission refused (no state change expected)
        :raises ImageAcquisitionError: Picker failed or picked file is not a valid image
        """
        if not await self._permissions.request(kind):
            raise PermissionDeniedError(PERMISSION_NOTICES[kind])

        picker = self._pickers.get(kind)
        if picker is None:
            raise ImageAcquisitionError(f"No {kind.value} picker configured")

        try:
            path = picker()
            if inspect.isawaitable(path):
                path = await path
        except Exception as e:
            raise ImageAcquisitionError(str(e)) from e

        if not path:
            logger.info(f"Image selection cancelled ({kind.value})")
            return None

        try:
            resolved = await asyncio.to_thread(FileValidator.ensure_valid_image, str(path))
        except FileValidationError as e:
            raise ImageAcquisitionError(str(e)) from e

        image = ImageRef(uri=resolved)
        logger.info(f"Image selected from {kind.value}: {image.uri}")
        return image


async def read_image_base64(image_ref: ImageRef) -> str:
    """
    Read an image's bytes and return them base64-encoded.

    :raises ImageReadError: If the file cannot be read or is empty
    """
    try:
        data = await asyncio.to_thread(Path(image_ref.uri).read_bytes)
    except OSError as e:
        raise ImageReadError(str(e)) from e

    if not data:
        raise ImageReadError(f"Image file is empty: {image_ref.uri}")

    return base64.b64encode(data).decode("ascii")
