# -*- coding: utf-8 -*-
"""
Tests for MediaStaging.

Tests cover:
- Type and size checks
- Rejected files leave the slot untouched
- Preview files and their release
"""

import os

import pytest

from models.media import COVER_SLOT, MediaSet
from services.exceptions import MediaValidationError
from services.media_staging import MediaStaging


@pytest.fixture
def staging(qapp, tmp_path):
    staging = MediaStaging(MediaSet(), preview_dir=tmp_path,
                           image_max_bytes=100, video_max_bytes=200)
    yield staging
    staging.release_all()


class TestAcceptance:
    """Test accept/check."""

    def test_accepts_image(self, staging, make_image):
        attachment = make_image()
        staging.accept(COVER_SLOT, attachment)
        assert staging.media.staged(COVER_SLOT) is attachment

    def test_rejects_non_image_for_image_slot(self, staging, make_video):
        with pytest.raises(MediaValidationError) as exc_info:
            staging.accept(COVER_SLOT, make_video())
        assert exc_info.value.message == "Please select an image file"
        assert exc_info.value.slot == COVER_SLOT
        assert not staging.media.is_filled(COVER_SLOT)

    def test_rejects_large_image(self, staging, make_image):
        with pytest.raises(MediaValidationError):
            staging.accept("img_front", make_image(size=101))

    def test_image_at_limit_accepted(self, staging, make_image):
        staging.accept("img_front", make_image(size=100))
        assert staging.media.is_filled("img_front")

    def test_video_slot_requires_video(self, staging, make_image):
        with pytest.raises(MediaValidationError) as exc_info:
            staging.accept("video_insp_engine_sound", make_image())
        assert exc_info.value.message == "Please select a video file"

    def test_rejects_long_video(self, staging, make_video):
        with pytest.raises(MediaValidationError) as exc_info:
            staging.accept("video_insp_engine_sound", make_video(size=201))
        assert "Video must be under" in exc_info.value.message

    def test_rejection_keeps_previous_file(self, staging, make_image, make_video):
        first = make_image("first.jpg")
        staging.accept(COVER_SLOT, first)
        with pytest.raises(MediaValidationError):
            staging.accept(COVER_SLOT, make_video())
        assert staging.media.staged(COVER_SLOT) is first

    def test_media_changed_emitted(self, staging, make_image, qtbot):
        with qtbot.waitSignal(staging.media_changed) as blocker:
            staging.accept(COVER_SLOT, make_image())
        assert blocker.args == [COVER_SLOT]

    def test_unknown_slot(self, staging, make_image):
        with pytest.raises(KeyError):
            staging.accept("img_moon", make_image())


class TestPreviews:
    """Test preview handles."""

    def test_preview_written_and_reused(self, staging, make_image):
        staging.accept(COVER_SLOT, make_image())
        handle = staging.acquire_preview(COVER_SLOT)
        assert handle.is_alive
        assert staging.acquire_preview(COVER_SLOT) is handle

    def test_preview_file_created_on_accept(self, staging, make_image, tmp_path):
        staging.accept(COVER_SLOT, make_image())
        files = [p for p in tmp_path.rglob("*") if p.is_file()]
        assert len(files) == 1
        assert files[0].name.startswith(f"{COVER_SLOT}-")
        assert staging.acquire_preview(COVER_SLOT).path == str(files[0])

    def test_loaded_media_gets_previews(self, staging, make_image, tmp_path):
        media = MediaSet()
        media.stage(COVER_SLOT, make_image())
        media.set_existing("img_front", "uploads/front.jpg")
        staging.set_media(media)
        files = [p for p in tmp_path.rglob("*") if p.is_file()]
        assert len(files) == 1

    def test_replacing_file_revokes_preview(self, staging, make_image):
        staging.accept(COVER_SLOT, make_image("a.jpg"))
        old = staging.acquire_preview(COVER_SLOT)
        staging.accept(COVER_SLOT, make_image("b.jpg"))
        assert not old.is_alive
        assert staging.acquire_preview(COVER_SLOT).path != old.path

    def test_clear_revokes_preview(self, staging, make_image):
        staging.accept(COVER_SLOT, make_image())
        handle = staging.acquire_preview(COVER_SLOT)
        staging.clear(COVER_SLOT)
        assert not handle.is_alive
        assert staging.acquire_preview(COVER_SLOT) is None

    def test_existing_reference_as_source(self, staging):
        staging.media.set_existing("img_front", "uploads/front.jpg")
        assert staging.preview_source("img_front") == "uploads/front.jpg"

    def test_release_all(self, staging, make_image):
        staging.accept(COVER_SLOT, make_image())
        staging.accept("img_front", make_image())
        handles = [staging.acquire_preview(COVER_SLOT), staging.acquire_preview("img_front")]
        staging.release_all()
        assert not any(os.path.exists(h.path) for h in handles)


class TestCompleteness:
    """Test gallery completeness."""

    def test_counts_cover_and_gallery_only(self, staging, make_image):
        staging.accept(COVER_SLOT, make_image())
        staging.accept("img_front", make_image())
        staging.accept("img_tyre_1", make_image())
        filled, total, percent = staging.gallery_completeness()
        assert (filled, total) == (2, 16)
        assert percent == round(2 * 100 / 16)
