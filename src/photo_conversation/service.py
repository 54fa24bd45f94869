import logging
from typing import Awaitable, Callable, Optional
from time import time

from .config import PhotoConversationConfig
from .exceptions import (
    ImageAcquisitionError,
    PermissionDeniedError,
    ToolNotInitializedError,
)
from .media.image_source import ACQUISITION_ERROR_PREFIXES, ImageSource, ImageSourceKind, read_image_base64
from .memory import ResponseRecorder, Session, SessionStateMachine, Stage
from .schemas import AnalysisResponse, ImageRef, SaveResult, SelectionOutcome
from .tools import CaptionTool, ConversationTool

logger = logging.getLogger(__name__)

ImageReader = Callable[[ImageRef], Awaitable[str]]


class PhotoConversationService:
    """
    Facade over the photo-to-conversation pipeline.
    The ONLY entry point for the UI layers.

    Runs on a single event loop. Analysis awaits the image read, the caption
    call and the conversation call in sequence; after each await the result is
    dropped if the session's image changed meanwhile.
    """

    def __init__(
        self,
        config: PhotoConversationConfig,
        state_machine: Optional[SessionStateMachine] = None,
        recorder: Optional[ResponseRecorder] = None,
        image_reader: ImageReader = read_image_base64,
    ):
        """
        Composition root.
        Tools and the image source are injected afterwards via the setters.
        """
        self.config = config
        self._state = state_machine or SessionStateMachine()
        self._recorder = recorder or ResponseRecorder()
        self._read_image = image_reader

        self._image_source: Optional[ImageSource] = None
        self._caption_tool: Optional[CaptionTool] = None
        self._conversation_tool: Optional[ConversationTool] = None

    @property
    def session(self) -> Session:
        return self._state.session

    @property
    def state_machine(self) -> SessionStateMachine:
        return self._state

    # ----------------------------
    # Image selection
    # ----------------------------
    async def select_from_gallery(self) -> SelectionOutcome:
        source = self._require_image_source()
        return await self._select(ImageSourceKind.GALLERY, source.select_from_gallery)

    async def capture_from_camera(self) -> SelectionOutcome:
        source = self._require_image_source()
        return await self._select(ImageSourceKind.CAMERA, source.capture_from_camera)

    def select_image(self, image: ImageRef) -> bool:
        """Put an already-acquired image into the session."""
        return self._state.select_image(image)

    async def _select(
        self,
        kind: ImageSourceKind,
        acquire: Callable[[], Awaitable[Optional[ImageRef]]],
    ) -> SelectionOutcome:
        try:
            image = await acquire()
        except PermissionDeniedError as e:
            logger.info(f"Permission denied for {kind.value}")
            return SelectionOutcome(notice=e.notice)
        except ImageAcquisitionError as e:
            message = f"{ACQUISITION_ERROR_PREFIXES[kind]}: {e}"
            logger.error(message)
            self._state.fail_acquisition(message)
            return SelectionOutcome()

        if image is None:
            return SelectionOutcome()

        self._state.select_image(image)
        return SelectionOutcome(image=image)

    # ----------------------------
    # Analysis
    # ----------------------------
    async def analyze(self) -> Optional[AnalysisResponse]:
        """
        Caption the current image and derive a conversational opener.

        :return: AnalysisResponse, or None if the request was ignored
                 (no image, already analyzing), the image could not be read,
                 or the result went stale
        :raises ToolNotInitializedError: If caption/conversation tools are missing
        """
        if not self._caption_tool or not self._conversation_tool:
            raise ToolNotInitializedError("Caption and conversation tools must be set before analyze().")

        if not self._state.begin_analysis():
            logger.info(f"Analyze ignored in stage {self._state.stage.value}")
            return None

        image = self._state.session.image
        start_time = time()

        try:
            image_base64 = await self._read_image(image)
        except Exception as e:
            if not self._is_live(image, "image read"):
                return None
            logger.error(f"Error analyzing image: {e}", exc_info=True)
            self._state.fail_analysis(f"Failed to analyze image: {e}")
            return None

        if not self._is_live(image, "image read"):
            return None

        caption = await self._caption_tool.caption(image_base64, image)
        if not self._is_live(image, "caption"):
            return None

        conversation = await self._conversation_tool.converse(caption.text)
        if not self._is_live(image, "conversation"):
            return None

        if not self._state.complete_analysis(caption.text, conversation.text):
            return None

        latency_ms = int((time() - start_time) * 1000)
        logger.info(
            f"Analysis ready in {latency_ms}ms "
            f"(caption={caption.source.value}, conversation={conversation.source.value})"
        )

        return AnalysisResponse(
            caption=caption.text,
            conversation=conversation.text,
            caption_source=caption.source,
            conversation_source=conversation.source,
            latency_ms=latency_ms,
        )

    def _is_live(self, image: ImageRef, step: str) -> bool:
        """True if the analysis started for `image` is still the one the session is waiting on."""
        if self._state.is_current(image) and self._state.stage == Stage.ANALYZING:
            return True
        logger.info(f"Discarding stale {step} result for image {image.ref_id}")
        return False

    # ----------------------------
    # Response handling
    # ----------------------------
    def update_response(self, text: str) -> bool:
        return self._state.update_response(text)

    def save_response(self) -> SaveResult:
        """Acknowledge the typed reply and reset the session."""
        result = self._recorder.save(self._state.session)
        if result.saved:
            self._state.save()
        return result

    def clear(self) -> None:
        self._state.clear()

    # ----------------------------
    # Dependency injection setters
    # ----------------------------
    def set_image_source(self, image_source: ImageSource) -> None:
        """Inject the camera/gallery adapter."""
        self._image_source = image_source

    def set_caption_tool(self, caption_tool: CaptionTool) -> None:
        """Inject a captioning tool."""
        self._caption_tool = caption_tool

    def set_conversation_tool(self, conversation_tool: ConversationTool) -> None:
        """Inject a conversation tool."""
        self._conversation_tool = conversation_tool

    def _require_image_source(self) -> ImageSource:
        if self._image_source is None:
            raise ToolNotInitializedError("Image source is not initialized.")
        return self._image_source
