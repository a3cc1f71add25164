# -*- coding: utf-8 -*-
"""
Common base for the inspection wizard steps.
"""

from typing import Optional

from PyQt5.QtCore import QObject

from services.wizard.step_validator import StepValidator
from ui.wizards.framework.base_step import BaseStep, StepValidationResult
from ui.wizards.vehicle_inspection.inspection_context import InspectionContext


class InspectionStep(BaseStep):
    """A step validated by StepValidator under its 1-based step number."""

    STEP_NUMBER = 0

    def __init__(self, context: InspectionContext, parent: Optional[QObject] = None):
        super().__init__(context, parent)

    @property
    def step_number(self) -> int:
        return self.STEP_NUMBER

    def validate(self) -> StepValidationResult:
        errors = StepValidator.validate_step(
            self.step_number, self.context.record, self.context.media
        )
        return StepValidationResult.from_errors(errors)

    def get_step_title(self) -> str:
        return StepValidator.get_step_name(self.step_number)
