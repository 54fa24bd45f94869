"""
Public application facade for Photo Conversation Service.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
from typing import Optional

from .caption_factory import create_caption_tool
from .config import PhotoConversationConfig
from .llm_factory import create_conversation_tool
from .media import ImageSource, LocalImageSource
from .memory import ResponseRecorder, Session
from .schemas import AnalysisResponse, SaveResult, SelectionOutcome
from .service import PhotoConversationService


class PhotoConversationApp:
    """
    Public application facade for Photo Conversation Service.

    All dependency wiring and factory usage is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = PhotoConversationApp(config, image_source=LocalImageSource(gallery_picker=...))
        app.initialize()
        await app.select_from_gallery()
        response = await app.analyze()
    """

    def __init__(
        self,
        config: PhotoConversationConfig,
        image_source: Optional[ImageSource] = None,
        recorder: Optional[ResponseRecorder] = None,
    ):
        """
        :param config: PhotoConversationConfig instance
        :param image_source: Camera/gallery adapter (defaults to an unconfigured LocalImageSource)
        :param recorder: Optional ResponseRecorder (e.g. with an on_saved hook)
        """
        self._config = config
        self._image_source = image_source
        self._recorder = recorder
        self._service: Optional[PhotoConversationService] = None

    def initialize(self) -> None:
        """
        Create the service and wire the caption tool, conversation tool and
        image source. Call once before any other method.
        """
        if self._service:
            return

        self._service = PhotoConversationService(self._config, recorder=self._recorder)
        self._service.set_caption_tool(create_caption_tool(config=self._config))
        self._service.set_conversation_tool(create_conversation_tool(config=self._config))
        self._service.set_image_source(self._image_source or LocalImageSource())

    @property
    def session(self) -> Session:
        return self._require_service().session

    def can_analyze(self) -> bool:
        return self._require_service().state_machine.can_analyze()

    def can_save(self) -> bool:
        return self._require_service().state_machine.can_save()

    async def select_from_gallery(self) -> SelectionOutcome:
        return await self._require_service().select_from_gallery()

    async def capture_from_camera(self) -> SelectionOutcome:
        return await self._require_service().capture_from_camera()

    async def analyze(self) -> Optional[AnalysisResponse]:
        """
        Caption the selected image and produce a conversational opener.

        :return: AnalysisResponse, or None if the call was ignored or failed to read the image
        """
        return await self._require_service().analyze()

    def update_response(self, text: str) -> bool:
        return self._require_service().update_response(text)

    def save_response(self) -> SaveResult:
        return self._require_service().save_response()

    def clear(self) -> None:
        self._require_service().clear()

    def _require_service(self) -> PhotoConversationService:
        if not self._service:
            raise RuntimeError("App not initialized. Call initialize() first.")
        return self._service
