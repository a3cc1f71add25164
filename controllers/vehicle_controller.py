# -*- coding: utf-8 -*-
"""
Vehicle Controller: read side of the marketplace inventory.

Lists vehicles for the stock and dashboard views, fetches one vehicle for
the detail view and maps a server record into the wizard's edit state.
"""

from typing import Any, Dict, List, Tuple

from controllers.base_controller import BaseController, OperationResult
from models.media import COVER_SLOT, MediaSet, is_media_slot
from models.vehicle_record import VehicleRecord, is_record_field
from services.api_client import VehicleApiClient
from utils.logger import get_logger

logger = get_logger(__name__)


class VehicleController(BaseController):
    """Controller for vehicle list/detail fetching."""

    def __init__(self, api_client: VehicleApiClient, parent=None):
        super().__init__(parent)
        self.api = api_client

    # ------------------------------------------------------------------
    # List / dashboard
    # ------------------------------------------------------------------

    def load_vehicles(self) -> OperationResult:
        """Fetch the inventory. Returns OperationResult with a list of server records."""
        return self.execute_with_error_handling("load_vehicles", self.api.get_vehicles)

    @staticmethod
    def summarize(vehicles: List[Dict[str, Any]]) -> Dict[str, int]:
        """Counts shown on the dashboard."""
        summary = {"total": len(vehicles), "live": 0, "sold": 0, "paused": 0, "verified": 0}
        for vehicle in vehicles:
            status = vehicle.get("status")
            if status == "For Sale":
                summary["live"] += 1
            elif status == "Sold":
                summary["sold"] += 1
            elif status == "Paused":
                summary["paused"] += 1
            if vehicle.get("verified") in (True, "true"):
                summary["verified"] += 1
        return summary

    # ------------------------------------------------------------------
    # Detail / edit
    # ------------------------------------------------------------------

    def load_vehicle(self, vehicle_id: str) -> OperationResult:
        """Fetch one server record. A missing vehicle fails with NotFoundException attached."""
        self._log_operation("load_vehicle", vehicle_id=vehicle_id)
        return self.execute_with_error_handling("load_vehicle", self.api.get_vehicle, vehicle_id)

    def load_for_edit(self, vehicle_id: str) -> OperationResult:
        """
        Fetch a vehicle and map it into wizard state.

        Returns OperationResult with (VehicleRecord, MediaSet).
        """
        result = self.load_vehicle(vehicle_id)
        if not result.success:
            return result
        try:
            return OperationResult.ok(data=self.map_server_record(result.data))
        except (TypeError, AttributeError) as e:
            logger.error(f"Malformed vehicle {vehicle_id}: {e}", exc_info=True)
            return OperationResult.fail(message="Vehicle data could not be read", exception=e)

    @staticmethod
    def map_server_record(server: Dict[str, Any]) -> Tuple[VehicleRecord, MediaSet]:
        """
        Split a server record into record fields and existing media references.

        - the cover falls back to the legacy ``imageUrl``
        - every known slot with a non-empty value becomes an existing reference
        - numbers become strings, missing fields take defaults
        - ``mfgYear`` falls back to ``year``; ``rcAvailable`` defaults to True
        """
        media = MediaSet()
        cover = server.get(COVER_SLOT) or server.get("imageUrl")
        if isinstance(cover, str) and cover:
            media.set_existing(COVER_SLOT, cover)

        for key, value in server.items():
            if key != COVER_SLOT and is_media_slot(key) and isinstance(value, str) and value:
                media.set_existing(key, value)

        fields = {
            key: value for key, value in server.items()
            if is_record_field(key) and not is_media_slot(key) and value is not None
        }
        if not fields.get("mfgYear") and fields.get("year") not in (None, ""):
            fields["mfgYear"] = fields["year"]
        if "rcAvailable" in fields and not isinstance(fields["rcAvailable"], bool) \
                and fields["rcAvailable"] not in ("true", "false"):
            fields["rcAvailable"] = bool(fields["rcAvailable"])

        record = VehicleRecord.from_dict(fields)
        return record, media
