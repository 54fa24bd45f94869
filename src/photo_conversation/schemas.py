import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ImageRef:
    """Handle to one selected image. Identity is ref_id, not uri."""
    uri: str
    ref_id: str = field(default_factory=lambda: uuid.uuid4().hex)


class ResultSource(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ProviderResult:
    text: str
    source: ResultSource = ResultSource.PRIMARY

    @classmethod
    def primary(cls, text: str) -> "ProviderResult":
        return cls(text=text, source=ResultSource.PRIMARY)

    @classmethod
    def fallback(cls, text: str) -> "ProviderResult":
        return cls(text=text, source=ResultSource.FALLBACK)


@dataclass
class AnalysisResponse:
    caption: str
    conversation: str
    caption_source: ResultSource
    conversation_source: ResultSource
    latency_ms: Optional[int] = None


@dataclass
class SaveResult:
    saved: bool
    title: Optional[str] = None
    message: Optional[str] = None
    response: Optional[str] = None


@dataclass
class SelectionOutcome:
    image: Optional[ImageRef] = None
    notice: Optional[str] = None

    @property
    def selected(self) -> bool:
        return self.image is not None
