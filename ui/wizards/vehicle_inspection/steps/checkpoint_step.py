# -*- coding: utf-8 -*-
"""
Steps 2-6 - checkpoint groups.

Each step lists the checkpoints bound to it; an Issue needs a remark
before the step can be left forward.
"""

from typing import List, Optional

from PyQt5.QtCore import QObject

from models.checkpoint import STATUS_ISSUE, Checkpoint, checkpoints_for_step
from services.wizard.step_validator import StepValidator
from ui.wizards.vehicle_inspection.inspection_context import InspectionContext
from .inspection_step import InspectionStep


class CheckpointStep(InspectionStep):
    """One checkpoint group (exterior, interior, engine, steering, AC)."""

    def __init__(self, context: InspectionContext, step_number: int,
                 parent: Optional[QObject] = None):
        if not StepValidator.STEP_EXTERIOR <= step_number <= StepValidator.STEP_AIR_CONDITIONING:
            raise ValueError(f"Step {step_number} has no checkpoint group")
        super().__init__(context, parent)
        self._step_number = step_number

    @property
    def step_number(self) -> int:
        return self._step_number

    def checkpoints(self) -> List[Checkpoint]:
        return checkpoints_for_step(self._step_number)

    def issue_count(self) -> int:
        """Issues flagged within this group only."""
        record = self.context.record
        return sum(1 for cp in self.checkpoints() if record.get(cp.status_field) == STATUS_ISSUE)
