# -*- coding: utf-8 -*-
"""
Step 7 - Gallery.
"""

from typing import List, Tuple

from models.media import GALLERY_SLOTS, MEDIA_SLOTS_BY_KEY, MediaSlot
from services.wizard.step_validator import StepValidator
from .inspection_step import InspectionStep


class GalleryStep(InspectionStep):
    """Cover photo plus the standard gallery positions."""

    STEP_NUMBER = StepValidator.STEP_GALLERY

    def get_step_description(self) -> str:
        return "Cover photo and standard angles"

    def slots(self) -> List[MediaSlot]:
        return [MEDIA_SLOTS_BY_KEY[key] for key in GALLERY_SLOTS]

    def completeness(self) -> Tuple[int, int]:
        """(filled, total) across the cover and gallery positions."""
        media = self.context.media
        filled = sum(1 for key in GALLERY_SLOTS if media.is_filled(key))
        return filled, len(GALLERY_SLOTS)
