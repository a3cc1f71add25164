# -*- coding: utf-8 -*-
"""
TVI Data Models
"""

from .checkpoint import Checkpoint, CHECKPOINTS, get_checkpoint, checkpoints_for_step
from .vehicle_record import ScalarField, SCALAR_FIELDS, VehicleRecord
from .media import MediaSlot, MEDIA_SLOTS, MediaSet, StagedAttachment

__all__ = [
    "Checkpoint",
    "CHECKPOINTS",
    "get_checkpoint",
    "checkpoints_for_step",
    "ScalarField",
    "SCALAR_FIELDS",
    "VehicleRecord",
    "MediaSlot",
    "MEDIA_SLOTS",
    "MediaSet",
    "StagedAttachment",
]
