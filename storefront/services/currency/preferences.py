"""Persisted display-currency preference.

The shopper's selected currency lives under a single key. Storage is behind a
small protocol so the store can run against SQLite on disk or a plain dict.
Missing or invalid stored values resolve to the base currency.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict, Optional, Protocol

from storefront.db.schema import BASIC_UTC_NOW, METADATA_DDL


class PreferenceStorage(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = value


class SqlitePreferenceStorage:
    """Key/value preference file backed by a `metadata` table."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        conn = self._connect()
        try:
            conn.execute(METADATA_DDL)
            conn.commit()
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def load(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM metadata WHERE key=?", (key,)).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def save(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO metadata(key,value) VALUES(?,?) ON CONFLICT(key) DO UPDATE "
                f"SET value=excluded.value, updated_at=({BASIC_UTC_NOW})",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()
