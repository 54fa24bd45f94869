"""
Session layer for the photo-to-conversation pipeline.

- session_state: immutable Session value and pure transitions
- state_machine: single owner of the live Session
- response_recorder: terminal save step
"""
from .session_state import Session, Stage, initial_session
from .state_machine import SessionStateMachine
from .response_recorder import ResponseRecorder

__all__ = [
    "Session",
    "Stage",
    "initial_session",
    "SessionStateMachine",
    "ResponseRecorder",
]
