# -*- coding: utf-8 -*-
"""
Tests for VehicleController.
"""

import pytest

from controllers.vehicle_controller import VehicleController
from models.media import COVER_SLOT
from services.exceptions import NetworkException, NotFoundException


@pytest.fixture
def controller(qapp, api_client):
    return VehicleController(api_client)


SERVER_RECORD = {
    "_id": "veh-7",
    "make": "Hyundai",
    "model": "Creta",
    "price": 1150000,
    "year": 2020,
    "odometer": 30500,
    "rcAvailable": "true",
    "fuelType": "Diesel",
    "insp_bumper_status": "Issue",
    "insp_bumper_remark": "Scratch",
    "imageUrl": "uploads/cover.jpg",
    "img_front": "uploads/front.jpg",
    "img_rc": "",
    "createdAt": "2024-01-01T00:00:00Z",
}


class TestMapServerRecord:
    """Test server record mapping."""

    def test_fields(self):
        record, _ = VehicleController.map_server_record(SERVER_RECORD)
        assert record.get("make") == "Hyundai"
        assert record.get("price") == "1150000"
        assert record.get("mfgYear") == "2020"
        assert record.get("rcAvailable") is True
        assert record.get("fuelType") == "Diesel"
        assert record.status("bumper") == "Issue"
        assert record.remark("bumper") == "Scratch"

    def test_media_references(self):
        _, media = VehicleController.map_server_record(SERVER_RECORD)
        assert media.existing(COVER_SLOT) == "uploads/cover.jpg"
        assert media.existing("img_front") == "uploads/front.jpg"
        assert not media.is_filled("img_rc")
        assert list(media.staged_items()) == []

    def test_main_image_preferred_over_legacy(self):
        _, media = VehicleController.map_server_record(
            dict(SERVER_RECORD, mainImage="uploads/main.jpg"))
        assert media.existing(COVER_SLOT) == "uploads/main.jpg"

    def test_explicit_mfg_year_kept(self):
        record, _ = VehicleController.map_server_record(dict(SERVER_RECORD, mfgYear="2019"))
        assert record.get("mfgYear") == "2019"


class TestLoading:
    """Test load operations."""

    def test_load_for_edit(self, controller, api_client):
        api_client.get_vehicle.return_value = SERVER_RECORD
        result = controller.load_for_edit("veh-7")

        assert result.success
        record, media = result.data
        assert record.get("model") == "Creta"
        assert media.is_filled(COVER_SLOT)

    def test_not_found(self, controller, api_client):
        api_client.get_vehicle.side_effect = NotFoundException()
        result = controller.load_for_edit("gone")

        assert not result.success
        assert isinstance(result.exception, NotFoundException)
        assert result.message == "Vehicle not found"

    def test_network_failure_signals_error(self, controller, api_client, qtbot):
        api_client.get_vehicles.side_effect = NetworkException("refused")
        with qtbot.waitSignal(controller.operation_error) as blocker:
            result = controller.load_vehicles()
        assert not result.success
        assert blocker.args[0] == "load_vehicles"

    def test_summarize(self):
        summary = VehicleController.summarize([
            {"status": "For Sale", "verified": True},
            {"status": "Sold"},
            {"status": "Paused", "verified": "true"},
        ])
        assert summary == {"total": 3, "live": 1, "sold": 1, "paused": 1, "verified": 2}
