# -*- coding: utf-8 -*-
"""
Vehicle Inspection Steps Package.

- Step 1: Vehicle Details
- Steps 2-6: Checkpoint groups (Exterior & Tyres, Interior & Electrical,
  Engine & Transmission, Steering & Suspension, Air Conditioning)
- Step 7: Gallery
- Step 8: Review
"""

from .inspection_step import InspectionStep
from .vehicle_details_step import VehicleDetailsStep
from .checkpoint_step import CheckpointStep
from .gallery_step import GalleryStep
from .review_step import ReviewStep

__all__ = [
    'InspectionStep',
    'VehicleDetailsStep',
    'CheckpointStep',
    'GalleryStep',
    'ReviewStep'
]
