"""Database migration utilities.

Schema evolution is keyed by an integer `schema_version` stored in the
metadata table. Migrations are idempotent and preserve existing rows.
"""

from __future__ import annotations
from pathlib import Path
import sqlite3
from typing import Optional

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _column_names(cur: sqlite3.Cursor, table: str) -> set[str]:
    cur.execute(f"PRAGMA table_info({table})")
    return {row[1] for row in cur.fetchall()}


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Upgrade schema to version 2 (direct admin rate per currency).

    Version 1 tables stored only the multiplier; add the nullable rate column
    and normalize stored codes to uppercase.
    """
    cur = conn.cursor()
    try:
        if "rate_to_inr" not in _column_names(cur, "currency_multipliers"):
            cur.execute("ALTER TABLE currency_multipliers ADD COLUMN rate_to_inr REAL")
        cur.execute(
            f"UPDATE currency_multipliers SET currency_code = UPPER(TRIM(currency_code)), "
            f"updated_at = ({schema_def.BASIC_UTC_NOW}) "
            "WHERE currency_code != UPPER(TRIM(currency_code))"
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
