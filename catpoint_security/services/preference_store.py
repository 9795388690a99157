"""Durable key/value preference store backed by SQLite."""

import os
import sqlite3
from datetime import datetime
from typing import List, Optional

from ..logging_config import get_logger
from ..utils import ensure_directory_exists

logger = get_logger("preference_store")


class PreferenceStore:
    """String key/value store persisted in a single SQLite table.

    Every write is its own transaction, so a reader never observes a partial
    update. A database file that SQLite cannot open is moved aside and
    replaced by an empty store.
    """

    def __init__(self, database_path: str = "data/catpoint.db"):
        """
        Initialize preference store.

        Args:
            database_path: Path to SQLite database file
        """
        self.database_path = database_path

        directory = os.path.dirname(database_path)
        if directory:
            ensure_directory_exists(directory)

        try:
            self._initialize_database()
        except sqlite3.DatabaseError as e:
            logger.error(f"Preference database {database_path} is unreadable ({e}), starting empty")
            self._quarantine_database()
            self._initialize_database()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value stored under key, or default."""
        with sqlite3.connect(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM preferences WHERE key = ?", (key,))
            row = cursor.fetchone()

        if row is None:
            return default
        return row[0]

    def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        with sqlite3.connect(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO preferences (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, value, datetime.now().isoformat()))
            conn.commit()

        logger.debug(f"Stored preference {key}")

    def remove(self, key: str) -> None:
        """Remove key if present."""
        with sqlite3.connect(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM preferences WHERE key = ?", (key,))
            conn.commit()

    def keys(self) -> List[str]:
        """List stored keys in sorted order."""
        with sqlite3.connect(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM preferences ORDER BY key")
            return [row[0] for row in cursor.fetchall()]

    def clear(self) -> None:
        """Remove every stored preference."""
        with sqlite3.connect(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM preferences")
            conn.commit()

    def _initialize_database(self) -> None:
        """Create the preferences table if needed."""
        with sqlite3.connect(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
            logger.debug(f"Preference database initialized: {self.database_path}")

    def _quarantine_database(self) -> None:
        """Move an unreadable database file out of the way."""
        corrupt_path = f"{self.database_path}.corrupt"
        if os.path.exists(corrupt_path):
            os.remove(corrupt_path)
        os.replace(self.database_path, corrupt_path)
        logger.warning(f"Moved unreadable preference database to {corrupt_path}")
