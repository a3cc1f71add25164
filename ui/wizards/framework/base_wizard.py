# -*- coding: utf-8 -*-
"""
Base Wizard - Abstract base class for all wizards.

Owns the context, the steps and the navigator, and exposes navigation and
submission as methods and signals. Rendering is left to the view layer.
"""

from typing import List, Optional
from abc import abstractmethod

from PyQt5.QtCore import QObject, pyqtSignal

from .base_step import ABCQObjectMeta, BaseStep, StepValidationResult
from .wizard_context import WizardContext
from .step_navigator import StepNavigator
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseWizard(QObject, metaclass=ABCQObjectMeta):
    """
    Abstract base class for wizards.

    Subclasses must implement:
    - create_steps(): Create and return list of wizard steps
    - create_context(): Create and return wizard context
    - on_submit(): Handle final submission
    """

    # Signals
    wizard_completed = pyqtSignal(dict)  # Emitted when wizard is submitted

    def __init__(self, parent: Optional[QObject] = None):
        """Initialize the wizard."""
        super().__init__(parent)

        # Initialize context and steps
        self.context = self.create_context()
        self.steps = self.create_steps()

        # Create navigator
        self.navigator = StepNavigator(self.context, self.steps, parent=self)

        # Connect navigator signals
        self.navigator.step_changed.connect(self._on_step_changed)
        self.navigator.validation_failed.connect(self._on_validation_failed)

        # Show first step
        first = self.navigator.get_current_step()
        if first is not None:
            first.on_show()

    # =========================================================================
    # Abstract Methods - Must be implemented by subclasses
    # =========================================================================

    @abstractmethod
    def create_steps(self) -> List[BaseStep]:
        """
        Create and return list of wizard steps.

        Returns:
            List of BaseStep instances
        """
        pass

    @abstractmethod
    def create_context(self) -> WizardContext:
        """
        Create and return wizard context.

        Returns:
            WizardContext instance
        """
        pass

    @abstractmethod
    def on_submit(self) -> bool:
        """
        Handle wizard submission.

        Called from the last step once it validates.

        Returns:
            True if submission was successful, False otherwise
        """
        pass

    # =========================================================================
    # Optional Methods - Can be overridden by subclasses
    # =========================================================================

    def get_wizard_title(self) -> str:
        """Get wizard title. Override to customize."""
        return "Wizard"

    # =========================================================================
    # Navigation
    # =========================================================================

    def go_next(self) -> bool:
        """Validate the current step and move forward (stays on the last step)."""
        return self.navigator.next_step()

    def go_back(self) -> bool:
        """Move back one step without validating."""
        return self.navigator.previous_step()

    def submit(self) -> bool:
        """Handle wizard submission from the last step."""
        if not self.navigator.is_last_step():
            logger.warning(
                f"Submit ignored: step {self.navigator.current_index + 1} is not the last step"
            )
            return False

        if not self.navigator.validate_current().is_valid:
            return False

        if self.on_submit():
            self.context.status = "completed"
            self.wizard_completed.emit(self.context.to_dict())
            return True
        return False

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def _on_step_changed(self, old_index: int, new_index: int):
        """Handle step change."""
        logger.debug(f"{self.get_wizard_title()}: step {old_index + 1} → {new_index + 1}")

    def _on_validation_failed(self, result: StepValidationResult):
        """Handle validation failure."""
        logger.debug(f"{self.get_wizard_title()}: validation failed {result.errors}")
