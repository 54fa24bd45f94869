"""
Tests for the deterministic caption and opener fallbacks.
"""
from datetime import datetime

import pytest

from photo_conversation.schemas import ImageRef
from photo_conversation.tools.fallbacks import (
    GALLERY_CAPTION,
    GENERIC_OPENER,
    LAST_RESORT_CAPTION,
    OPENER_RULES,
    default_opener,
    fallback_caption,
    format_date,
    format_time,
)

PET_OPENER = "What an adorable pet! What makes this moment special?"
VIEW_OPENER = "What a beautiful view! What memories does this place hold for you?"


def fixed_clock():
    return datetime(2026, 10, 19, 15, 4, 5)


class TestFallbackCaption:
    """Tests for metadata-based captions."""

    @pytest.mark.parametrize("uri", ["/p/a.png", "/p/a.JPG", "/p/a.jpeg", "/p/A.PnG"])
    def test_raster_extension_gives_dated_caption(self, uri):
        """Test .jpg/.jpeg/.png get a dated caption."""
        caption = fallback_caption(ImageRef(uri=uri), clock=fixed_clock)
        assert caption == "An image captured on 10/19/2026 at 3:04:05 PM"

    @pytest.mark.parametrize("uri", ["/p/a.heic", "/p/a.gif", "/p/noext", "content://media/42"])
    def test_other_extension_gives_gallery_caption(self, uri):
        """Test other files get the gallery caption."""
        assert fallback_caption(ImageRef(uri=uri), clock=fixed_clock) == GALLERY_CAPTION

    def test_inspection_failure_gives_last_resort(self):
        """Test a failing clock gives the last-resort caption."""
        def broken_clock():
            raise RuntimeError("clock unavailable")

        assert fallback_caption(ImageRef(uri="/p/a.png"), clock=broken_clock) == LAST_RESORT_CAPTION

    def test_missing_image_gives_last_resort(self):
        """Test a missing image gives the last-resort caption."""
        assert fallback_caption(None, clock=fixed_clock) == LAST_RESORT_CAPTION

    @pytest.mark.parametrize("uri", ["/photos/.png", "/photos/.JPEG", "shot.backup.jpg"])
    def test_extension_match_is_on_the_name_ending(self, uri):
        """Test names ending in a raster extension get a dated caption, dotfiles included."""
        caption = fallback_caption(ImageRef(uri=uri), clock=fixed_clock)
        assert caption == "An image captured on 10/19/2026 at 3:04:05 PM"

    def test_time_formatting_edges(self):
        """Test 12-hour time and unpadded date formatting."""
        assert format_time(datetime(2026, 1, 2, 0, 5, 9)) == "12:05:09 AM"
        assert format_time(datetime(2026, 1, 2, 12, 0, 0)) == "12:00:00 PM"
        assert format_time(datetime(2026, 1, 2, 9, 30, 0)) == "9:30:00 AM"
        assert format_date(datetime(2026, 1, 2)) == "1/2/2026"


class TestDefaultOpener:
    """Tests for keyword-rule openers."""

    def test_each_group_matches(self):
        """Test every keyword maps to its group's opener."""
        for keywords, opener in OPENER_RULES:
            for keyword in keywords:
                assert default_opener(f"a photo with a {keyword} in it") == opener

    def test_pet_group_wins_over_landscape(self):
        """Test the pet rule is checked before the landscape rule."""
        assert default_opener("a dog sitting on a beach") == PET_OPENER

    def test_people_group_wins_over_food(self):
        """Test the people rule is checked before the food rule."""
        opener = default_opener("people sharing a meal")
        assert opener.startswith("What a wonderful moment with people!")

    def test_no_match_gives_generic(self):
        """Test unmatched captions get the generic opener."""
        assert default_opener("a red bicycle") == GENERIC_OPENER

    def test_matching_is_case_sensitive(self):
        """Test keyword matching is case-sensitive."""
        assert default_opener("A Dog On The Beach") == GENERIC_OPENER

    def test_dated_fallback_caption_gives_generic(self):
        """Test a dated fallback caption gets the generic opener."""
        caption = fallback_caption(ImageRef(uri="/p/a.png"), clock=fixed_clock)
        assert default_opener(caption) == GENERIC_OPENER

    @pytest.mark.parametrize("caption", [None, ""])
    def test_empty_caption_gives_generic(self, caption):
        """Test empty captions get the generic opener."""
        assert default_opener(caption) == GENERIC_OPENER

    def test_substring_match(self):
        """Test keywords match inside longer words."""
        # "carpet" contains "pet"
        assert default_opener("a carpet") == PET_OPENER
