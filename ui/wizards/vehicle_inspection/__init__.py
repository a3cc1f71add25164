# -*- coding: utf-8 -*-
"""
Vehicle Inspection Wizard Package.

Eight-step create/edit flow for a vehicle listing with its inspection report.
"""

from .inspection_context import InspectionContext
from .autosave import AutosaveScheduler
from .inspection_wizard import InspectionWizard

__all__ = [
    'InspectionContext',
    'AutosaveScheduler',
    'InspectionWizard'
]
