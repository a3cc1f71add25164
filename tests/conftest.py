# -*- coding: utf-8 -*-
"""
Shared fixtures for the test suite.

Qt runs offscreen; pytest-qt provides ``qapp`` and ``qtbot``.
"""

import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("TVI_DATA_DIR", tempfile.mkdtemp(prefix="tvi-tests-"))

from unittest.mock import MagicMock

import pytest

from models.media import COVER_SLOT, MediaSet, StagedAttachment
from models.vehicle_record import VehicleRecord
from repositories.database import Database
from repositories.draft_repository import DraftRepository
from services.api_client import VehicleApiClient
from services.draft_service import DraftService


@pytest.fixture
def make_image():
    """Factory for staged image attachments."""
    def factory(name="photo.jpg", size=16, mime_type="image/jpeg"):
        return StagedAttachment(file_name=name, mime_type=mime_type, content=b"\xff" * size)
    return factory


@pytest.fixture
def make_video():
    """Factory for staged video attachments."""
    def factory(name="clip.mp4", size=16, mime_type="video/mp4"):
        return StagedAttachment(file_name=name, mime_type=mime_type, content=b"\x00" * size)
    return factory


@pytest.fixture
def valid_record():
    """A record whose details step passes (RC not required)."""
    record = VehicleRecord()
    record.set("make", "Honda")
    record.set("model", "City")
    record.set("price", "500000")
    record.set("mfgYear", "2019")
    record.set("odometer", "42000")
    record.set("rcAvailable", False)
    return record


@pytest.fixture
def valid_media(make_image):
    """A media set with a cover photo."""
    media = MediaSet()
    media.stage(COVER_SLOT, make_image("cover.jpg"))
    return media


@pytest.fixture
def memory_db():
    """Private in-memory SQLite database."""
    db = Database(":memory:")
    yield db
    db.close()


@pytest.fixture
def draft_repository(memory_db):
    return DraftRepository(memory_db)


@pytest.fixture
def draft_service(draft_repository):
    return DraftService(repository=draft_repository)


@pytest.fixture
def api_client():
    """VehicleApiClient double; uploads succeed and report progress."""
    client = MagicMock(spec=VehicleApiClient)

    def upload(*args, on_progress=None, **kwargs):
        for percent in (0, 40, 80, 100):
            if on_progress is not None:
                on_progress(percent)
        return {"data": {"id": "veh-101"}}

    client.create_vehicle.side_effect = upload
    client.update_vehicle.side_effect = upload
    client.media_url.side_effect = lambda path: f"https://cdn.test/{path}"
    return client


