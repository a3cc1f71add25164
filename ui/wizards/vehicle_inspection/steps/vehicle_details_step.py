# -*- coding: utf-8 -*-
"""
Step 1 - Vehicle Details.

Specs, registration and legal documents. The RC upload is required while
the RC is declared available; the NOC upload only matters for closed loans.
"""

from typing import List

from models.media import NOC_SLOT, RC_SLOT
from models.vehicle_record import SCALAR_FIELDS, ScalarField
from services.wizard.step_validator import StepValidator
from .inspection_step import InspectionStep

# Filled by the system or edited elsewhere
_HIDDEN_FIELDS = ("year", "status", "verified")


class VehicleDetailsStep(InspectionStep):
    """Basic vehicle and registration data."""

    STEP_NUMBER = StepValidator.STEP_DETAILS

    def get_step_description(self) -> str:
        return "Make, model, price, registration and documents"

    def fields(self) -> List[ScalarField]:
        return [f for f in SCALAR_FIELDS if f.key not in _HIDDEN_FIELDS]

    def required_fields(self) -> List[str]:
        return list(StepValidator.REQUIRED_DETAILS)

    def document_slots(self) -> List[str]:
        """Document slots currently relevant to the record."""
        record = self.context.record
        slots = []
        if record.get("rcAvailable"):
            slots.append(RC_SLOT)
        if record.get("hypothecation") == "Close":
            slots.append(NOC_SLOT)
        return slots
