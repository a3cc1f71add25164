# -*- coding: utf-8 -*-
"""
Tests for DraftService.

Tests cover:
- Meaningful-content rule
- Save/load round trip with binary attachments
- Reconciliation with the field and slot catalogs
- Degrading when the store is unavailable
"""

import sqlite3
from unittest.mock import MagicMock

from models.media import COVER_SLOT, MediaSet, StagedAttachment
from models.vehicle_record import VehicleRecord
from repositories.draft_repository import StoredDraft
from services.draft_service import DraftService


class TestWorthSaving:
    """Test is_worth_saving."""

    def test_blank_state_is_not_worth_saving(self):
        assert DraftService.is_worth_saving(VehicleRecord(), MediaSet()) is False

    def test_any_meaningful_field(self):
        for key in ("make", "model", "price"):
            record = VehicleRecord()
            record.set(key, "x")
            assert DraftService.is_worth_saving(record, MediaSet()) is True

    def test_other_fields_do_not_count(self):
        record = VehicleRecord()
        record.set("color", "Red")
        assert DraftService.is_worth_saving(record, MediaSet()) is False

    def test_cover_photo_counts(self, valid_media):
        assert DraftService.is_worth_saving(VehicleRecord(), valid_media) is True


class TestSaveLoad:
    """Test persistence."""

    def test_no_draft(self, draft_service):
        assert draft_service.load() is None
        assert draft_service.has_draft() is False

    def test_round_trip(self, draft_service, valid_record, make_image):
        media = MediaSet()
        cover = make_image("cover.jpg", size=64)
        media.stage(COVER_SLOT, cover)

        assert draft_service.save(valid_record, media) is True
        record, loaded = draft_service.load()

        assert record == valid_record
        assert loaded.staged(COVER_SLOT) == cover

    def test_clear_is_idempotent(self, draft_service, valid_record):
        draft_service.save(valid_record, MediaSet())
        assert draft_service.clear() is True
        assert draft_service.clear() is True
        assert draft_service.load() is None

    def test_unknown_fields_and_slots_dropped(self, draft_repository):
        draft_repository.save(StoredDraft(
            key="current_draft",
            record={"make": "Kia", "retiredField": "x"},
            existing={"img_retired": "uploads/x.jpg"},
            attachments={"img_retired": StagedAttachment("x.jpg", "image/jpeg", b"1")},
        ))
        record, media = DraftService(repository=draft_repository).load()

        assert record.get("make") == "Kia"
        assert record.get("fuelType") == "Petrol"
        assert media.is_empty()


class TestUnavailableStore:
    """Storage failures never propagate."""

    def test_failing_repository(self, valid_record):
        repository = MagicMock()
        repository.save.side_effect = sqlite3.OperationalError("disk I/O error")
        repository.get.side_effect = sqlite3.OperationalError("disk I/O error")
        repository.delete.side_effect = sqlite3.OperationalError("disk I/O error")
        service = DraftService(repository=repository)

        assert service.save(valid_record, MediaSet()) is False
        assert service.load() is None
        assert service.clear() is False
        assert service.has_draft() is False

    def test_unopenable_database(self, tmp_path, monkeypatch, valid_record):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        monkeypatch.setattr("app.config.Config.DRAFT_DB_PATH", blocker / "drafts.db")
        service = DraftService()

        assert service.save(valid_record, MediaSet()) is False
        assert service.load() is None
