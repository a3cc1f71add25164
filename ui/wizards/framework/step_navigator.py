# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression (next/previous)
- Step validation before moving forward
- Progress tracking
"""

from typing import List, Optional
from PyQt5.QtCore import QObject, pyqtSignal

from .base_step import BaseStep, StepValidationResult
from .wizard_context import WizardContext
from utils.logger import get_logger

logger = get_logger(__name__)


class StepNavigator(QObject):
    """
    Manages navigation between wizard steps.

    Indices are 0-based. Moving forward validates the current step; moving
    back never does.
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_index, new_index
    validation_failed = pyqtSignal(object)  # StepValidationResult
    validation_passed = pyqtSignal(int)  # index of the validated step

    def __init__(self, context: WizardContext, steps: List[BaseStep], parent=None):
        """
        Initialize the navigator.

        Args:
            context: Wizard context
            steps: List of wizard steps
        """
        super().__init__(parent)
        self.context = context
        self.steps = steps
        self.current_index = 0

    def get_current_step(self) -> Optional[BaseStep]:
        """Get the current step."""
        if 0 <= self.current_index < len(self.steps):
            return self.steps[self.current_index]
        return None

    def get_step_count(self) -> int:
        """Get total number of steps."""
        return len(self.steps)

    def is_last_step(self) -> bool:
        return self.current_index == len(self.steps) - 1

    def can_go_next(self) -> bool:
        """Check if there is a step after the current one."""
        return self.current_index < len(self.steps) - 1

    def can_go_previous(self) -> bool:
        """Check if there is a step before the current one."""
        return self.current_index > 0

    def validate_current(self) -> StepValidationResult:
        """Validate the current step and emit the outcome."""
        current_step = self.get_current_step()
        if current_step is None:
            return StepValidationResult()

        result = current_step.validate()
        if result.is_valid:
            self.context.mark_step_completed(self.current_index)
            self.validation_passed.emit(self.current_index)
        else:
            logger.warning(f"Step {self.current_index} validation failed: {result.errors}")
            self.validation_failed.emit(result)
        return result

    def next_step(self, skip_validation: bool = False) -> bool:
        """
        Navigate to the next step.

        On the last step a passing validation marks it completed but the
        index stays put.

        Args:
            skip_validation: If True, skip validation

        Returns:
            True if the current step passed (or validation was skipped)
        """
        if not skip_validation:
            if not self.validate_current().is_valid:
                return False

        if not self.can_go_next():
            logger.debug(f"Already at last step ({self.current_index})")
            return True

        return self._navigate_to(self.current_index + 1)

    def previous_step(self) -> bool:
        """Navigate to the previous step. Never validates."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous: already at first step ({self.current_index})")
            return False

        return self._navigate_to(self.current_index - 1)

    def goto_step(self, index: int, skip_validation: bool = False) -> bool:
        """
        Navigate to a specific step.

        Args:
            index: Target step index
            skip_validation: If True, skip validation when moving forward

        Returns:
            True if navigation was successful
        """
        if index < 0 or index >= len(self.steps):
            return False

        if index == self.current_index:
            return True

        if index > self.current_index and not skip_validation:
            if not self.validate_current().is_valid:
                return False

        return self._navigate_to(index)

    def _navigate_to(self, new_index: int) -> bool:
        if new_index < 0 or new_index >= len(self.steps):
            logger.error(f"Invalid step index: {new_index} (valid range: 0-{len(self.steps)-1})")
            return False

        old_index = self.current_index

        current_step = self.get_current_step()
        if current_step:
            current_step.on_hide()

        self.current_index = new_index
        self.context.current_step_index = new_index

        new_step = self.get_current_step()
        if new_step:
            new_step.on_show()

        logger.info(f"Navigation: step {old_index} → {new_index}")
        self.step_changed.emit(old_index, new_index)
        return True

    def reset(self):
        """Reset navigator to first step."""
        self._navigate_to(0)

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage (current step over total).

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        if len(self.steps) == 0:
            return 0.0
        return (self.current_index + 1) / len(self.steps) * 100.0
