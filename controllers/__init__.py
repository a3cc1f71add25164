# -*- coding: utf-8 -*-
"""
TVI Controllers
===============
Controller layer between the views and the API client.

Usage:
    from controllers import VehicleController, OperationResult

    controller = VehicleController(api_client)
    result = controller.load_vehicle(vehicle_id)
    if result.success:
        print(result.data["make"])
    else:
        print(f"Error: {result.message}")
"""

from controllers.base_controller import (
    BaseController,
    OperationResult,
)

from controllers.vehicle_controller import VehicleController

__all__ = [
    "BaseController",
    "OperationResult",
    "VehicleController",
]
