# -*- coding: utf-8 -*-
"""
Wizard Context - shared state of one wizard run.

Tracks identity, lifecycle status, the current step and which steps have
validated. Concrete wizards add their own payload and serialization.
"""

from typing import Dict, Any
from datetime import datetime
from abc import ABC, abstractmethod
import uuid


class WizardContext(ABC):
    """
    Base class for wizard context.

    Subclasses extend to_dict() and implement from_dict().
    """

    def __init__(self):
        self.wizard_id: str = str(uuid.uuid4())
        self.status: str = "draft"  # draft, submitting, completed
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()
        self.current_step_index: int = 0

        # Indices of steps that passed validation
        self.completed_steps: set = set()

    def touch(self):
        self.updated_at = datetime.now()

    def mark_step_completed(self, step_index: int):
        self.completed_steps.add(step_index)
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the shared fields. Subclasses add their own keys."""
        return {
            "wizard_id": self.wizard_id,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step_index": self.current_step_index,
            "completed_steps": sorted(self.completed_steps),
        }

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WizardContext':
        """Restore a context from to_dict() output."""
        pass

    @classmethod
    def _restore_base_fields(cls, context: 'WizardContext', data: Dict[str, Any]):
        context.wizard_id = data.get("wizard_id", context.wizard_id)
        context.status = data.get("status", "draft")
        context.current_step_index = data.get("current_step_index", 0)
        context.completed_steps = set(data.get("completed_steps", []))

        if "created_at" in data:
            context.created_at = datetime.fromisoformat(data["created_at"])
        if "updated_at" in data:
            context.updated_at = datetime.fromisoformat(data["updated_at"])
