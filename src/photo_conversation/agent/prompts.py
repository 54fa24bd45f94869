from langchain_core.prompts import PromptTemplate


CONVERSATION_PROMPT = PromptTemplate.from_template(
"""You are an AI assistant that helps users understand their photos.

Based on this image description: "{caption}", generate a friendly, personalized response (1-2 sentences) that:
1. Acknowledges what's in the image in a positive way
2. Asks a simple question about the image that encourages the user to share more details

Make it sound natural and conversational, not like a generic question."""
)


def build_conversation_prompt(caption: str) -> str:
    """Render the conversation prompt for one caption."""
    return CONVERSATION_PROMPT.format(caption=caption)
