# -*- coding: utf-8 -*-
"""
Step validation service for the Vehicle Inspection Wizard.

Validates record and media state for each step without UI coupling.
"""

from typing import Dict, Optional, Tuple

from models.checkpoint import STATUS_ISSUE, checkpoints_for_step
from models.media import COVER_SLOT, RC_SLOT, MediaSet
from models.vehicle_record import VehicleRecord


REQUIRED = "Required"


class StepValidator:
    """Validates wizard step data. Steps are numbered 1..8."""

    # Step constants
    STEP_DETAILS = 1
    STEP_EXTERIOR = 2
    STEP_INTERIOR = 3
    STEP_ENGINE = 4
    STEP_STEERING = 5
    STEP_AIR_CONDITIONING = 6
    STEP_GALLERY = 7
    STEP_REVIEW = 8

    TOTAL_STEPS = 8

    REQUIRED_DETAILS = ("make", "model", "price", "mfgYear", "odometer")

    STEP_NAMES = (
        "Vehicle Details",
        "Exterior & Tyres",
        "Interior & Electrical",
        "Engine & Transmission",
        "Steering & Suspension",
        "Air Conditioning",
        "Gallery",
        "Review",
    )

    @staticmethod
    def validate_step(step: int, record: VehicleRecord, media: MediaSet) -> Dict[str, str]:
        """
        Validate one step.

        Args:
            step: Step number (1..8)
            record: Current record
            media: Current media set

        Returns:
            Mapping of field/slot key to error message; empty when valid
        """
        errors: Dict[str, str] = {}

        if step == StepValidator.STEP_DETAILS:
            for key in StepValidator.REQUIRED_DETAILS:
                if not str(record.get(key) or "").strip():
                    errors[key] = REQUIRED
            if record.get("rcAvailable") and not media.is_filled(RC_SLOT):
                errors[RC_SLOT] = REQUIRED

        elif StepValidator.STEP_EXTERIOR <= step <= StepValidator.STEP_AIR_CONDITIONING:
            for cp in checkpoints_for_step(step):
                if record.get(cp.status_field) == STATUS_ISSUE \
                        and not record.get(cp.remark_field).strip():
                    errors[cp.remark_field] = f"{cp.label} remark is required"

        elif step == StepValidator.STEP_GALLERY:
            if not media.is_filled(COVER_SLOT):
                errors[COVER_SLOT] = "Cover photo is required"

        # Review step and unknown steps carry no field rules
        return errors

    @staticmethod
    def validate_all(record: VehicleRecord,
                     media: MediaSet) -> Tuple[Optional[int], Dict[str, str]]:
        """
        Validate every step up to the gallery, stopping at the first failure.

        Returns:
            Tuple of (failing_step, errors); (None, {}) when all steps pass
        """
        for step in range(StepValidator.STEP_DETAILS, StepValidator.STEP_REVIEW):
            errors = StepValidator.validate_step(step, record, media)
            if errors:
                return step, errors
        return None, {}

    @staticmethod
    def get_step_name(step: int) -> str:
        """Get display name for step."""
        if 1 <= step <= len(StepValidator.STEP_NAMES):
            return StepValidator.STEP_NAMES[step - 1]
        return ""
