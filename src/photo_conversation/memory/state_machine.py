"""
Session state machine.

Single owner of the live Session. The only place allowed to decide whether an
operation is legal in the current stage; front-ends ask it instead of keeping
their own enabled/disabled flags.
"""
import logging
from typing import Callable, Optional

from ..schemas import ImageRef
from . import session_state
from .session_state import Session, Stage

logger = logging.getLogger(__name__)


class SessionStateMachine:
    """
    Holds exactly one Session and applies transitions to it.

    Every transition method returns True if the event was accepted.
    Rejected events leave the session untouched.
    """

    def __init__(self, session: Optional[Session] = None):
        self._session: Session = session or session_state.initial_session()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def stage(self) -> Stage:
        return self._session.stage

    def can_analyze(self) -> bool:
        return session_state.begin_analysis(self._session) is not None

    def can_save(self) -> bool:
        return self._session.has_saveable_response()

    def is_current(self, image: Optional[ImageRef]) -> bool:
        return self._session.is_current(image)

    # ----------------------------
    # Transitions
    # ----------------------------
    def select_image(self, image: ImageRef) -> bool:
        return self._apply("select_image", lambda s: session_state.select_image(s, image))

    def begin_analysis(self) -> bool:
        return self._apply("begin_analysis", session_state.begin_analysis)

    def complete_analysis(self, caption: str, conversation: str) -> bool:
        return self._apply(
            "complete_analysis",
            lambda s: session_state.complete_analysis(s, caption, conversation)
        )

    def fail_analysis(self, message: str) -> bool:
        return self._apply("fail_analysis", lambda s: session_state.fail_analysis(s, message))

    def fail_acquisition(self, message: str) -> bool:
        return self._apply("fail_acquisition", lambda s: session_state.fail_acquisition(s, message))

    def update_response(self, text: str) -> bool:
        return self._apply("update_response", lambda s: session_state.update_response(s, text))

    def save(self) -> bool:
        return self._apply("save", session_state.save)

    def clear(self) -> bool:
        return self._apply("clear", session_state.clear)

    def _apply(self, event: str, transition: Callable[[Session], Optional[Session]]) -> bool:
        previous = self._session
        updated = transition(previous)
        if updated is None:
            logger.debug(f"Rejected '{event}' in stage {previous.stage.value}")
            return False

        self._session = updated
        if updated.stage != previous.stage:
            logger.info(f"Session {previous.stage.value} -> {updated.stage.value} ({event})")
        return True
