"""
Deterministic local substitutes for the remote caption and conversation services.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from ..schemas import ImageRef

logger = logging.getLogger(__name__)

RASTER_EXTENSIONS = (".jpg", ".jpeg", ".png")

GALLERY_CAPTION = "A photo in your gallery"
LAST_RESORT_CAPTION = "A photo you selected"

GENERIC_OPENER = "I see your photo! What makes this moment special to you?"

# Order matters: first matching group wins
OPENER_RULES = (
    (("person", "people"),
     "What a wonderful moment with people! What's the story behind this photo?"),
    (("food", "meal"),
     "That food looks delicious! What made this meal special?"),
    (("pet", "cat", "dog"),
     "What an adorable pet! What makes this moment special?"),
    (("landscape", "beach", "mountain"),
     "What a beautiful view! What memories does this place hold for you?"),
)


def format_date(moment: datetime) -> str:
    """M/D/YYYY, no zero padding."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_time(moment: datetime) -> str:
    """H:MM:SS AM|PM, 12-hour clock, no zero padding on the hour."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def fallback_caption(
    image_ref: Optional[ImageRef],
    clock: Callable[[], datetime] = datetime.now,
) -> str:
    """
    Build a caption from file metadata when the captioning service is unavailable.

    :param image_ref: Image whose extension decides the wording
    :param clock: Source of the current date/time
    :return: Never empty
    """
    try:
        uri = image_ref.uri.lower()
        now = clock()
        if uri.endswith(RASTER_EXTENSIONS):
            return f"An image captured on {format_date(now)} at {format_time(now)}"
        return GALLERY_CAPTION
    except Exception as e:
        logger.error(f"Error generating fallback caption: {e}")
        return LAST_RESORT_CAPTION


def default_opener(caption: Optional[str]) -> str:
    """
    Pick a canned opener by case-sensitive keyword match on the caption.
    """
    if caption:
        for keywords, opener in OPENER_RULES:
            if any(keyword in caption for keyword in keywords):
                return opener
    return GENERIC_OPENER
