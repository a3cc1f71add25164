# -*- coding: utf-8 -*-
"""
Draft persistence service for the create flow.

Keeps at most one unsent vehicle (record + staged media) under a fixed key.
Storage problems never reach the user: they are logged and the call degrades
to a no-op.
"""

import sqlite3
from typing import Optional, Tuple

from app.config import Config
from models.media import COVER_SLOT, MediaSet, is_media_slot
from models.vehicle_record import VehicleRecord
from repositories.database import Database
from repositories.draft_repository import DraftRepository, StoredDraft
from utils.logger import get_logger

logger = get_logger(__name__)

MEANINGFUL_FIELDS = ("make", "model", "price")


class DraftService:
    """
    Save, load and clear the current draft.

    Args:
        repository: Draft store. When omitted a SQLite store at
                    Config.DRAFT_DB_PATH is opened on first use.
        key: Draft key (Config.DRAFT_KEY)
    """

    def __init__(self, repository: Optional[DraftRepository] = None, key: str = None):
        self._repository = repository
        self.key = key or Config.DRAFT_KEY
        self._unavailable = False

    def _repo(self) -> Optional[DraftRepository]:
        if self._repository is None and not self._unavailable:
            try:
                self._repository = DraftRepository(Database(Config.DRAFT_DB_PATH))
            except (sqlite3.Error, OSError) as e:
                self._unavailable = True
                logger.warning(f"Draft store unavailable, autosave disabled: {e}")
        return self._repository

    @staticmethod
    def is_worth_saving(record: VehicleRecord, media: MediaSet) -> bool:
        """True once make, model, price or the cover photo has content."""
        if any(str(record.get(key) or "").strip() for key in MEANINGFUL_FIELDS):
            return True
        return media.is_filled(COVER_SLOT)

    def save(self, record: VehicleRecord, media: MediaSet) -> bool:
        """
        Overwrite the draft with the given state.

        Returns:
            True if persisted, False if the store was unavailable or failed
        """
        repo = self._repo()
        if repo is None:
            return False

        draft = StoredDraft(
            key=self.key,
            record=record.to_dict(),
            existing=media.existing_items(),
            attachments=dict(media.staged_items()),
        )
        try:
            repo.save(draft)
            return True
        except Exception as e:
            logger.error(f"Draft save failed: {e}", exc_info=True)
            return False

    def load(self) -> Optional[Tuple[VehicleRecord, MediaSet]]:
        """
        Load the draft, reconciled with the current field and slot catalogs.

        Unknown fields and slots are dropped; missing fields take defaults.

        Returns:
            (record, media) or None when there is no readable draft
        """
        repo = self._repo()
        if repo is None:
            return None

        try:
            stored = repo.get(self.key)
        except Exception as e:
            logger.error(f"Draft load failed: {e}", exc_info=True)
            return None

        if stored is None:
            return None

        record = VehicleRecord.from_dict(stored.record)
        media = MediaSet()
        dropped = []
        for slot, attachment in stored.attachments.items():
            if is_media_slot(slot):
                media.stage(slot, attachment)
            else:
                dropped.append(slot)
        for slot, reference in stored.existing.items():
            if is_media_slot(slot) and isinstance(reference, str):
                media.set_existing(slot, reference)
            else:
                dropped.append(slot)

        if dropped:
            logger.info(f"Dropped unknown draft slots: {', '.join(sorted(dropped))}")
        logger.info(f"Draft loaded (saved at {stored.saved_at})")
        return record, media

    def clear(self) -> bool:
        """
        Delete the draft. Safe to call when no draft exists.

        Returns:
            True if the store accepted the call
        """
        repo = self._repo()
        if repo is None:
            return False
        try:
            repo.delete(self.key)
            return True
        except Exception as e:
            logger.error(f"Draft clear failed: {e}", exc_info=True)
            return False

    def has_draft(self) -> bool:
        repo = self._repo()
        if repo is None:
            return False
        try:
            return repo.get(self.key) is not None
        except Exception as e:
            logger.error(f"Draft lookup failed: {e}")
            return False
