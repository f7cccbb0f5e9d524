"""SQLite link store.

This module persists link records in a SQLite table keyed by the link id.
The primary key makes ``INSERT OR IGNORE`` the atomic insert-if-absent.
"""

import sqlite3
import logging
import threading
from datetime import datetime
from typing import Optional

from .base import LinkStore
from ..models.link import LinkRecord

logger = logging.getLogger(__name__)


class SqliteLinkStore(LinkStore):
    """Link store backed by a single shared SQLite connection."""

    def __init__(self, db_path: str):
        """Open the database and make sure the schema exists.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        self.db_path = db_path
        self._lock = threading.Lock()
        self._connection: Optional[sqlite3.Connection] = None
        self.init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The connection is shared across threads; every use holds ``self._lock``.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize database tables."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS links (
            id TEXT PRIMARY KEY,
            original_url TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
        """
        create_index_sql = "CREATE INDEX IF NOT EXISTS idx_links_created_at ON links(created_at)"
        with self._lock:
            conn = self._get_connection()
            try:
                conn.execute(create_table_sql)
                conn.execute(create_index_sql)
                conn.commit()
                logger.info(f"Link table ready in {self.db_path}")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise

    def put_if_absent(self, record: LinkRecord) -> bool:
        query = "INSERT OR IGNORE INTO links (id, original_url, created_at) VALUES (?, ?, ?)"
        params = (record.id, record.original_url, record.created_at.isoformat())
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.execute(query, params)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Insert failed for link {record.id}: {e}")
                raise
            return cursor.rowcount == 1

    def get(self, link_id: str) -> Optional[LinkRecord]:
        query = "SELECT id, original_url, created_at FROM links WHERE id = ?"
        with self._lock:
            row = self._get_connection().execute(query, (link_id,)).fetchone()
        if row is None:
            return None
        return LinkRecord(
            id=row["id"],
            original_url=row["original_url"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def size(self) -> int:
        with self._lock:
            row = self._get_connection().execute("SELECT COUNT(*) FROM links").fetchone()
        return row[0]
