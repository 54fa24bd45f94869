"""
Response recorder.

Terminal step of the pipeline: validates the user's reply and acknowledges it.
Nothing is persisted; "saved" is an acknowledgment only.
"""
import logging
from typing import Callable, Optional

from ..schemas import SaveResult
from .session_state import Session

logger = logging.getLogger(__name__)

SAVED_TITLE = "Response Saved"
SAVED_MESSAGE = "Your response has been saved successfully."


class ResponseRecorder:
    """
    Accepts a reply only when the session has an image, a caption, a
    conversation opener and a non-empty trimmed response.
    """

    def __init__(self, on_saved: Optional[Callable[[SaveResult], None]] = None):
        """
        :param on_saved: Optional hook receiving each accepted SaveResult
        """
        self._on_saved = on_saved

    def save(self, session: Session) -> SaveResult:
        """
        Validate and acknowledge the session's reply.

        :return: SaveResult(saved=False) as a no-op when preconditions fail
        """
        if not session.has_saveable_response():
            return SaveResult(saved=False)

        response = session.user_response.strip()
        result = SaveResult(
            saved=True,
            title=SAVED_TITLE,
            message=SAVED_MESSAGE,
            response=response,
        )
        logger.info(f"Response saved ({len(response)} chars) for image {session.image.ref_id}")

        if self._on_saved is not None:
            try:
                self._on_saved(result)
            except Exception as e:
                logger.error(f"on_saved hook failed: {e}", exc_info=True)

        return result
