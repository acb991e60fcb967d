"""
SQLite-backed user preferences for Hacker Stories.

Schema
──────
table: preferences
  key    TEXT PRIMARY KEY
  value  TEXT NOT NULL

Storage failures never reach the caller: the store logs them and keeps serving
values from memory for the rest of the session.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Durable key/value string store with a session-only fallback."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._memory: dict[str, str] = {}
        self._durable = True
        self.init_db()

    @property
    def durable(self) -> bool:
        """False once a storage failure has forced memory-only mode."""
        return self._durable

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connected sqlite3.Connection, creating the file/dir if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path))
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _degrade(self, action: str, exc: Exception) -> None:
        self._durable = False
        logger.warning(
            "Preference storage %s failed at %s, continuing in memory: %s",
            action, self.path, exc,
        )

    def init_db(self) -> None:
        """Create the preferences table if it doesn't exist yet."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS preferences (
                        key   TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                    """
                )
        except (sqlite3.Error, OSError) as exc:
            self._degrade("init", exc)
            return
        logger.info("Preference DB initialised at %s", self.path)

    def get(self, key: str, default: str) -> str:
        """Return the stored value for *key*, or *default* if none is stored.

        An empty string is a stored value and is returned as such.
        """
        if not self._durable:
            return self._memory.get(key, default)

        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM preferences WHERE key = ?", (key,)
                ).fetchone()
        except (sqlite3.Error, OSError) as exc:
            self._degrade("read", exc)
            return self._memory.get(key, default)

        return default if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, synchronously."""
        self._memory[key] = value
        if not self._durable:
            return

        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO preferences (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        except (sqlite3.Error, OSError) as exc:
            self._degrade("write", exc)

    def close(self) -> None:
        """Release the store. Connections are per-operation, so only memory is dropped."""
        self._memory.clear()
        logger.debug("Preference store at %s closed", self.path)
