from typing import Protocol
from ..schemas import ProviderResult


class ConversationTool(Protocol):
    """Protocol for a tool turning a caption into a conversational opener."""
    async def converse(self, caption: str) -> ProviderResult:
        ...
