"""
Session state for the photo-to-conversation pipeline.

A Session is an immutable value. Each transition is a pure function
(session, event) -> new session, or None when the event is not legal in the
current stage.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..schemas import ImageRef


class Stage(str, Enum):
    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    ANALYZING = "analyzing"
    ANALYSIS_READY = "analysis_ready"
    ERROR = "error"


# Stages from which analysis may start
ANALYZABLE_STAGES = {Stage.IMAGE_SELECTED, Stage.ANALYSIS_READY}


@dataclass(frozen=True)
class Session:
    """
    Single unit of work: one image travelling through caption -> conversation -> reply.

    Invariants:
    - caption is set only when image is set
    - conversation is set only when caption is set
    """
    image: Optional[ImageRef] = None
    caption: Optional[str] = None
    conversation: Optional[str] = None
    user_response: str = ""
    stage: Stage = Stage.IDLE
    last_error: Optional[str] = None

    def is_current(self, image: Optional[ImageRef]) -> bool:
        """True if `image` is still the session's live image."""
        if self.image is None or image is None:
            return False
        return self.image.ref_id == image.ref_id

    def has_saveable_response(self) -> bool:
        return (
            self.stage == Stage.ANALYSIS_READY
            and self.image is not None
            and self.caption is not None
            and self.conversation is not None
            and bool(self.user_response.strip())
        )


def initial_session() -> Session:
    """Fresh Idle session."""
    return Session()


def select_image(session: Session, image: ImageRef) -> Session:
    """Any stage -> IMAGE_SELECTED. Drops everything derived from the previous image."""
    return Session(image=image, stage=Stage.IMAGE_SELECTED)


def begin_analysis(session: Session) -> Optional[Session]:
    if session.image is None:
        return None
    if session.stage not in ANALYZABLE_STAGES:
        return None
    return replace(
        session,
        caption=None,
        conversation=None,
        user_response="",
        last_error=None,
        stage=Stage.ANALYZING,
    )


def complete_analysis(session: Session, caption: str, conversation: str) -> Optional[Session]:
    if session.stage != Stage.ANALYZING or session.image is None:
        return None
    return replace(
        session,
        caption=caption,
        conversation=conversation,
        stage=Stage.ANALYSIS_READY,
    )


def fail_analysis(session: Session, message: str) -> Optional[Session]:
    """ANALYZING -> ERROR. Only image read failures land here."""
    if session.stage != Stage.ANALYZING:
        return None
    return replace(
        session,
        caption=None,
        conversation=None,
        stage=Stage.ERROR,
        last_error=message,
    )


def fail_acquisition(session: Session, message: str) -> Session:
    """Picker failure: reset and surface the error."""
    return Session(stage=Stage.ERROR, last_error=message)


def update_response(session: Session, text: str) -> Optional[Session]:
    if session.stage != Stage.ANALYSIS_READY:
        return None
    return replace(session, user_response=text)


def save(session: Session) -> Optional[Session]:
    if not session.has_saveable_response():
        return None
    return initial_session()


def clear(session: Session) -> Session:
    return initial_session()
