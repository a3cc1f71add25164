# -*- coding: utf-8 -*-
"""
SQLite database wrapper for local application state.

Holds the schema for the draft store and provides a transaction context
manager and simple fetch helpers.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

from utils.logger import get_logger

logger = get_logger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS drafts (
    draft_key TEXT PRIMARY KEY,
    record_json TEXT NOT NULL,
    existing_json TEXT NOT NULL DEFAULT '{}',
    schema_version INTEGER NOT NULL DEFAULT 1,
    saved_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS draft_attachments (
    draft_key TEXT NOT NULL,
    slot TEXT NOT NULL,
    file_name TEXT NOT NULL,
    mime_type TEXT NOT NULL,
    content BLOB NOT NULL,
    PRIMARY KEY (draft_key, slot),
    FOREIGN KEY (draft_key) REFERENCES drafts(draft_key) ON DELETE CASCADE
);
"""


class Database:
    """
    Local SQLite database.

    The connection is opened lazily; ``connect`` raises ``sqlite3.Error`` when
    the file cannot be opened so callers decide how to degrade.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize database.

        Args:
            db_path: Path of the SQLite file. Defaults to Config.DRAFT_DB_PATH.
                     Use ":memory:" for a private in-memory database.
        """
        if db_path is None:
            from app.config import Config
            db_path = Config.DRAFT_DB_PATH

        self._db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    def connect(self) -> sqlite3.Connection:
        """Open the connection if needed."""
        if self._connection is None:
            if isinstance(self._db_path, Path):
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self._db_path))
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA foreign_keys = ON")
            logger.debug(f"SQLite connection opened: {self._db_path}")
        return self._connection

    def initialize(self) -> None:
        """Create tables if they do not exist."""
        conn = self.connect()
        conn.executescript(SCHEMA)
        conn.commit()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Transaction context manager.

        Usage:
            with db.transaction() as conn:
                # Operations auto-commit on success, rollback on error
        """
        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"SQLite transaction rolled back: {e}")
            raise

    def fetch_one(self, query: str, params: Tuple = ()) -> Optional[sqlite3.Row]:
        conn = self.connect()
        return conn.execute(query, params).fetchone()

    def fetch_all(self, query: str, params: Tuple = ()) -> List[sqlite3.Row]:
        conn = self.connect()
        return conn.execute(query, params).fetchall()

    def close(self) -> None:
        """Close database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("SQLite connection closed")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> Any:
        self.close()
        return False
