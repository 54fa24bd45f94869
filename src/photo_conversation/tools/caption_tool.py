from typing import Protocol
from ..schemas import ImageRef, ProviderResult


class CaptionTool(Protocol):
    """Protocol for a captioning tool used by the pipeline."""
    async def caption(self, image_base64: str, image_ref: ImageRef) -> ProviderResult:
        ...
