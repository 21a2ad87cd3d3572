"""Database schema DDL definitions and initialization utilities.

Tables:
  - currency_multipliers: admin-configured per-currency multiplier and optional
    direct rate to the base currency (rate_to_inr, NULL when unset)
  - metadata: key/value store (schema version, stored preferences)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

CURRENCY_MULTIPLIERS_DDL = f"""
CREATE TABLE IF NOT EXISTS currency_multipliers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    currency_code TEXT NOT NULL UNIQUE, -- uppercase ISO code
    multiplier REAL NOT NULL DEFAULT 1 CHECK (multiplier > 0),
    rate_to_inr REAL CHECK (rate_to_inr IS NULL OR rate_to_inr > 0),
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

DDL_ORDER: Sequence[str] = (
    CURRENCY_MULTIPLIERS_DDL,
    METADATA_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
