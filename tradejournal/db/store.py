"""SQLite state store for Trade Journal.

The whole AppState is stored as one JSON blob under a fixed namespace key.
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tradejournal.core.lifecycle import default_app_state
from tradejournal.models import AppState

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "aiTradingJournalState"

# Fields a stored blob must carry to be considered at all
REQUIRED_FIELDS = ("settings", "currentSession")


class StateStore:
    """SQLite-backed key-value store holding the application state."""

    def __init__(self, db_path: Path, namespace: str = DEFAULT_NAMESPACE):
        """Initialize the state store.

        Args:
            db_path: Path to the SQLite database file.
            namespace: Key the state blob is stored under.
        """
        self.db_path = db_path
        self.namespace = namespace
        self.usable = True
        self._ensure_db_dir()
        try:
            self._init_schema()
        except sqlite3.DatabaseError as e:
            # Reads return nothing and writes fail until the file is replaced
            logger.warning("Database %s is unusable, ignoring it: %s", self.db_path, e)
            self.usable = False

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS app_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def load_raw(self) -> Optional[str]:
        """Get the stored blob without parsing it."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM app_state WHERE key = ?", (self.namespace,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def save_raw(self, value: str) -> None:
        """Store a blob as-is."""
        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO app_state (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (self.namespace, value, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def load(self) -> Optional[AppState]:
        """Load the stored state.

        Returns:
            The state, or None if nothing usable is stored.
        """
        if not self.usable:
            return None

        try:
            raw = self.load_raw()
        except sqlite3.Error as e:
            logger.error("Failed to read state from %s: %s", self.db_path, e)
            return None

        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Stored state is not valid JSON, ignoring it: %s", e)
            return None

        if not isinstance(data, dict) or not all(data.get(f) for f in REQUIRED_FIELDS):
            logger.warning("Stored state is missing required fields, ignoring it")
            return None

        try:
            return AppState.model_validate(data)
        except ValidationError as e:
            logger.warning("Stored state failed validation, ignoring it: %s", e)
            return None

    def load_or_default(self) -> AppState:
        """Load the stored state, falling back to a fresh default state."""
        state = self.load()
        if state is None:
            return default_app_state()
        return state

    def save(self, state: AppState) -> bool:
        """Persist the state.

        Args:
            state: State to store.

        Returns:
            True on success, False if the write failed.
        """
        if not self.usable:
            logger.error("Not saving state: database %s is unusable", self.db_path)
            return False

        try:
            self.save_raw(state.to_json())
        except sqlite3.Error as e:
            logger.error("Failed to save state to %s: %s", self.db_path, e)
            return False
        return True

    def clear(self) -> None:
        """Delete the stored state."""
        if not self.usable:
            logger.error("Not clearing state: database %s is unusable", self.db_path)
            return

        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM app_state WHERE key = ?", (self.namespace,))
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()
