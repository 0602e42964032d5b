'''
    File Name: gateway.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

import sqlite3
from pathlib import Path
import logging
from typing import Dict, Optional, Protocol

import config

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    """Key/value storage used by the host to persist the ledger."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryGateway:
    """Dict-backed gateway for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteGateway:
    """Gateway storing string values in a single sqlite table."""

    def __init__(self, db_path: Path = None):
        # prefer explicit path, otherwise config value
        if db_path is not None:
            self.db_path = Path(db_path)
        else:
            self.db_path = Path(config.DATABASE_PATH)

    def _connect(self):
        """Return a new sqlite3 connection to the configured DB path."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(str(self.db_path))

    def ensure_database(self) -> None:
        """
        Ensure the configured SQLite database file exists and has the
        key/value table. Safe to call multiple times.
        """
        logger.debug("Ensuring database exists at %s", self.db_path)
        try:
            conn = self._connect()
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )
            conn.commit()
            conn.close()
        except Exception:
            logger.exception("Failed to create/initialize database at %s", self.db_path)
            raise

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None when the key (or the table) is missing.

        Reading never creates the database file.
        """
        if not self.db_path.exists():
            return None
        conn = sqlite3.connect(str(self.db_path))
        try:
            cur = conn.cursor()
            cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cur.fetchone()
        except sqlite3.DatabaseError:
            logger.warning("Could not read key %s from %s", key, self.db_path)
            return None
        finally:
            conn.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace `key` in one transaction."""
        self.ensure_database()
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                    (key, value),
                )
        except Exception:
            logger.exception("Failed writing key %s to %s", key, self.db_path)
            raise
        finally:
            conn.close()
