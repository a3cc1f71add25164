# -*- coding: utf-8 -*-
"""
Tests for DraftRepository.
"""

from models.media import StagedAttachment
from repositories.database import Database
from repositories.draft_repository import DraftRepository, StoredDraft


def _draft(**overrides):
    values = dict(
        key="current_draft",
        record={"make": "Honda"},
        existing={"img_front": "uploads/front.jpg"},
        attachments={"mainImage": StagedAttachment("cover.jpg", "image/jpeg", b"\x01\x02")},
    )
    values.update(overrides)
    return StoredDraft(**values)


class TestDraftRepository:
    """Test upsert/load/delete."""

    def test_missing_draft(self, draft_repository):
        assert draft_repository.get("current_draft") is None

    def test_save_and_get(self, draft_repository):
        draft_repository.save(_draft())
        stored = draft_repository.get("current_draft")

        assert stored.record == {"make": "Honda"}
        assert stored.existing == {"img_front": "uploads/front.jpg"}
        assert stored.attachments["mainImage"].content == b"\x01\x02"
        assert stored.saved_at is not None

    def test_save_overwrites(self, draft_repository):
        draft_repository.save(_draft())
        draft_repository.save(_draft(record={"make": "Kia"}, attachments={}))
        stored = draft_repository.get("current_draft")

        assert stored.record == {"make": "Kia"}
        assert stored.attachments == {}
        assert draft_repository.keys() == ["current_draft"]

    def test_delete(self, draft_repository):
        draft_repository.save(_draft())
        assert draft_repository.delete("current_draft") is True
        assert draft_repository.get("current_draft") is None
        assert draft_repository.delete("current_draft") is False

    def test_unreadable_record_json(self, draft_repository, memory_db):
        draft_repository.save(_draft())
        with memory_db.transaction() as conn:
            conn.execute("UPDATE drafts SET record_json = ?", ("{not json",))
        assert draft_repository.get("current_draft").record == {}

    def test_file_database(self, tmp_path):
        db = Database(tmp_path / "nested" / "drafts.db")
        DraftRepository(db).save(_draft())
        db.close()

        with Database(tmp_path / "nested" / "drafts.db") as reopened:
            assert DraftRepository(reopened).get("current_draft").record == {"make": "Honda"}
