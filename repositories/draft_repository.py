# -*- coding: utf-8 -*-
"""
Draft repository for database operations.

Stores one row per draft key in ``drafts`` and the staged binary
attachments in ``draft_attachments``, content kept as-is.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from models.media import StagedAttachment
from .database import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1


@dataclass
class StoredDraft:
    """Raw draft content as persisted, before any schema reconciliation."""

    key: str
    record: Dict[str, Any] = field(default_factory=dict)
    existing: Dict[str, str] = field(default_factory=dict)
    attachments: Dict[str, StagedAttachment] = field(default_factory=dict)
    schema_version: int = SCHEMA_VERSION
    saved_at: Optional[datetime] = None


class DraftRepository:
    """Repository for draft upsert/load/delete."""

    def __init__(self, db: Database):
        self.db = db
        self.db.initialize()

    def save(self, draft: StoredDraft) -> StoredDraft:
        """Replace the draft stored under ``draft.key``."""
        draft.saved_at = datetime.now()
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM draft_attachments WHERE draft_key = ?", (draft.key,))
            conn.execute(
                """
                INSERT INTO drafts (draft_key, record_json, existing_json, schema_version, saved_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(draft_key) DO UPDATE SET
                    record_json = excluded.record_json,
                    existing_json = excluded.existing_json,
                    schema_version = excluded.schema_version,
                    saved_at = excluded.saved_at
                """,
                (
                    draft.key,
                    json.dumps(draft.record),
                    json.dumps(draft.existing),
                    draft.schema_version,
                    draft.saved_at.isoformat(),
                ),
            )
            conn.executemany(
                """
                INSERT INTO draft_attachments (draft_key, slot, file_name, mime_type, content)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (draft.key, slot, att.file_name, att.mime_type, att.content)
                    for slot, att in draft.attachments.items()
                ],
            )
        logger.debug(f"Saved draft {draft.key} ({len(draft.attachments)} attachments)")
        return draft

    def get(self, key: str) -> Optional[StoredDraft]:
        """Get the draft stored under key, or None."""
        row = self.db.fetch_one("SELECT * FROM drafts WHERE draft_key = ?", (key,))
        if row is None:
            return None

        attachments = {}
        for att in self.db.fetch_all(
            "SELECT slot, file_name, mime_type, content FROM draft_attachments "
            "WHERE draft_key = ?", (key,)
        ):
            attachments[att["slot"]] = StagedAttachment(
                file_name=att["file_name"],
                mime_type=att["mime_type"],
                content=bytes(att["content"]),
            )

        return StoredDraft(
            key=key,
            record=_loads(row["record_json"]),
            existing=_loads(row["existing_json"]),
            attachments=attachments,
            schema_version=row["schema_version"],
            saved_at=datetime.fromisoformat(row["saved_at"]) if row["saved_at"] else None,
        )

    def delete(self, key: str) -> bool:
        """Delete a draft. Returns True if a row was removed."""
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM draft_attachments WHERE draft_key = ?", (key,))
            cursor = conn.execute("DELETE FROM drafts WHERE draft_key = ?", (key,))
            removed = cursor.rowcount > 0
        if removed:
            logger.debug(f"Deleted draft {key}")
        return removed

    def keys(self) -> List[str]:
        return [row["draft_key"] for row in self.db.fetch_all("SELECT draft_key FROM drafts")]


def _loads(text: Optional[str]) -> Dict[str, Any]:
    if not text:
        return {}
    try:
        value = json.loads(text)
    except ValueError:
        logger.warning("Discarding unreadable draft payload")
        return {}
    return value if isinstance(value, dict) else {}
