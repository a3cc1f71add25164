# -*- coding: utf-8 -*-
"""
Base Step - Abstract base class for wizard steps.

Steps hold no widgets: they describe one stage of a wizard and validate
the shared context. Views observe them through signals.

All wizard steps should inherit from this class and implement:
- validate(): Validate step data
"""

from typing import Dict, Optional
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field

from PyQt5.QtCore import QObject, pyqtSignal


@dataclass
class StepValidationResult:
    """Result of step validation. ``errors`` maps field keys to messages."""
    is_valid: bool = True
    errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Dict[str, str]) -> 'StepValidationResult':
        return cls(is_valid=not errors, errors=dict(errors))


# Combine PyQt5 metaclass with ABC metaclass
class ABCQObjectMeta(type(QObject), ABCMeta):
    """Metaclass that combines PyQt5's metaclass with ABC."""
    pass


class BaseStep(QObject, metaclass=ABCQObjectMeta):
    """
    Abstract base class for wizard steps.

    Provides common functionality for:
    - Lifecycle hooks (show/hide)
    - Data validation
    - Navigation signals
    """

    # Signals
    step_shown = pyqtSignal()

    def __init__(self, context: 'WizardContext', parent: Optional[QObject] = None):
        """
        Initialize the step.

        Args:
            context: The wizard context for data sharing
            parent: Parent object
        """
        super().__init__(parent)
        self.context = context
        self.visit_count = 0

    def on_show(self):
        """Called when the step becomes current."""
        self.visit_count += 1
        self.step_shown.emit()

    def on_hide(self):
        """
        Called when the step is left (moving to another step).

        Override this method to perform cleanup if needed.
        """
        pass

    # =========================================================================
    # Abstract Methods - Must be implemented by subclasses
    # =========================================================================

    @abstractmethod
    def validate(self) -> StepValidationResult:
        """
        Validate the step's data.

        Returns:
            StepValidationResult with validation status and messages
        """
        pass

    # =========================================================================
    # Optional Methods - Can be overridden by subclasses
    # =========================================================================

    def get_step_title(self) -> str:
        """
        Get the step's title.

        Default implementation returns the class name.
        """
        return self.__class__.__name__

    def get_step_description(self) -> str:
        """Get the step's description shown to the user."""
        return ""
