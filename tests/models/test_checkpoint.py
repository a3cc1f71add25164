# -*- coding: utf-8 -*-
"""
Tests for the checkpoint catalog.
"""

import pytest

from models.checkpoint import (
    CHECKPOINT_STEPS, CHECKPOINTS, STATUS_ISSUE, STATUS_NA, STATUS_OK,
    checkpoints_for_step, get_checkpoint
)
from models.media import is_media_slot


class TestCatalog:
    """Test catalog shape."""

    def test_ids_are_unique(self):
        ids = [cp.id for cp in CHECKPOINTS]
        assert len(ids) == len(set(ids))

    def test_every_checkpoint_belongs_to_a_checkpoint_step(self):
        assert {cp.step for cp in CHECKPOINTS} == set(CHECKPOINT_STEPS)

    def test_field_names(self):
        cp = get_checkpoint("bumper")
        assert cp.status_field == "insp_bumper_status"
        assert cp.remark_field == "insp_bumper_remark"

    def test_every_evidence_slot_is_a_media_slot(self):
        for cp in CHECKPOINTS:
            for slot in cp.slots:
                assert is_media_slot(slot), slot

    def test_default_status_is_allowed(self):
        for cp in CHECKPOINTS:
            assert cp.default_status in cp.allowed_statuses

    def test_na_only_where_allowed(self):
        assert STATUS_NA not in get_checkpoint("bumper").allowed_statuses
        assert get_checkpoint("sunroof").allowed_statuses == (STATUS_OK, STATUS_ISSUE, STATUS_NA)

    def test_optional_equipment_defaults_to_na(self):
        for checkpoint_id in ("camera_sensor", "sunroof", "climate_control"):
            assert get_checkpoint(checkpoint_id).default_status == STATUS_NA

    def test_engine_videos(self):
        assert get_checkpoint("engine_sound").video_slots == ("video_insp_engine_sound",)
        assert get_checkpoint("blowby").video_slots == ("video_insp_blowby",)

    def test_tyres_always_documented(self):
        tyres = get_checkpoint("wheels")
        assert tyres.always_document is True
        assert "img_tyre_optional" in tyres.image_slots


class TestLookup:
    """Test lookups."""

    def test_unknown_checkpoint_raises(self):
        with pytest.raises(KeyError):
            get_checkpoint("flux_capacitor")

    def test_checkpoints_for_step_keeps_order(self):
        steering = [cp.id for cp in checkpoints_for_step(5)]
        assert steering == ["suspension", "steering", "brake"]

    def test_non_checkpoint_step_is_empty(self):
        assert checkpoints_for_step(1) == []
        assert checkpoints_for_step(7) == []
