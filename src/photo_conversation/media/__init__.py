from .image_source import (
    ImageSource,
    ImageSourceKind,
    LocalImageSource,
    PermissionGate,
    GrantedPermissions,
    read_image_base64,
)

__all__ = [
    "ImageSource",
    "ImageSourceKind",
    "LocalImageSource",
    "PermissionGate",
    "GrantedPermissions",
    "read_image_base64",
]
