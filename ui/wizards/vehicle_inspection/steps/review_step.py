# -*- coding: utf-8 -*-
"""
Step 8 - Review.

No field rules; confirms the publish intent and summarizes the report.
"""

from typing import Any, Dict

from models.media import COVER_SLOT
from services.wizard.step_validator import StepValidator
from .inspection_step import InspectionStep


class ReviewStep(InspectionStep):
    """Summary before publishing."""

    STEP_NUMBER = StepValidator.STEP_REVIEW

    def get_step_description(self) -> str:
        return "Check the report and publish"

    def summary(self) -> Dict[str, Any]:
        record = self.context.record
        media = self.context.media
        issues = record.issues()
        return {
            "title": " ".join(
                part for part in (record.get("mfgYear"), record.get("make"),
                                  record.get("model"), record.get("variant")) if part
            ),
            "price": record.get("price"),
            "odometer": record.get("odometer"),
            "fuelType": record.get("fuelType"),
            "transmission": record.get("transmission"),
            "status": record.get("status"),
            "issue_count": len(issues),
            "issues": [
                {"id": cp.id, "label": cp.label, "remark": record.get(cp.remark_field)}
                for cp in issues
            ],
            "has_cover": media.is_filled(COVER_SLOT),
            "new_uploads": sum(1 for _ in media.staged_items()),
        }
