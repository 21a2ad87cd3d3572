"""Data Access Layer for admin currency multipliers.

Responsibilities
----------------
- CRUD helpers for `currency_multipliers` rows.
- Enforce one row per currency code (codes stored uppercase).
- Distinguish "leave rate_to_inr alone" from "clear rate_to_inr" on update.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Any, Dict, List, Optional

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"
_UNSET = object()

_COLUMNS = "id, currency_code, multiplier, rate_to_inr, created_at, updated_at"


class DuplicateCurrencyError(ValueError):
    """A multiplier row already exists for the currency code."""


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
        return {key: row[key] for key in row.keys()}

    # ------------------------------------------------------------------
    # Multipliers
    def list_multipliers(self) -> List[Dict[str, Any]]:
        conn = self._connect()
        try:
            cur = conn.execute(
                f"SELECT {_COLUMNS} FROM currency_multipliers ORDER BY currency_code"
            )
            return [self._row_to_dict(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def get_multiplier(self, multiplier_id: int) -> Optional[Dict[str, Any]]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM currency_multipliers WHERE id=?",
                (multiplier_id,),
            ).fetchone()
            return self._row_to_dict(row) if row else None
        finally:
            conn.close()

    def create_multiplier(
        self, currency_code: str, multiplier: float, rate_to_inr: Optional[float] = None
    ) -> Dict[str, Any]:
        conn = self._connect()
        try:
            try:
                cur = conn.execute(
                    """
                    INSERT INTO currency_multipliers (currency_code, multiplier, rate_to_inr)
                    VALUES (?, ?, ?)
                    """,
                    (currency_code.upper(), multiplier, rate_to_inr),
                )
            except sqlite3.IntegrityError as e:
                if "UNIQUE" not in str(e):
                    raise
                raise DuplicateCurrencyError(
                    f"multiplier for {currency_code.upper()} already exists"
                ) from e
            conn.commit()
            new_id = int(cur.lastrowid)
        finally:
            conn.close()
        created = self.get_multiplier(new_id)
        if created is None:
            raise RuntimeError(f"multiplier row {new_id} vanished after insert")
        return created

    def update_multiplier(
        self,
        multiplier_id: int,
        *,
        currency_code: Optional[str] = None,
        multiplier: Optional[float] = None,
        rate_to_inr: Any = _UNSET,
    ) -> Optional[Dict[str, Any]]:
        """Update given fields; pass rate_to_inr=None to clear the direct rate.

        Returns the updated row, or None when the id does not exist.
        """
        assignments: List[str] = []
        params: List[Any] = []
        if currency_code is not None:
            assignments.append("currency_code=?")
            params.append(currency_code.upper())
        if multiplier is not None:
            assignments.append("multiplier=?")
            params.append(multiplier)
        if rate_to_inr is not _UNSET:
            assignments.append("rate_to_inr=?")
            params.append(rate_to_inr)
        if self.get_multiplier(multiplier_id) is None:
            return None
        if assignments:
            assignments.append(f"updated_at=({UTC_NOW_SQL})")
            conn = self._connect()
            try:
                try:
                    conn.execute(
                        f"UPDATE currency_multipliers SET {', '.join(assignments)} WHERE id=?",
                        (*params, multiplier_id),
                    )
                except sqlite3.IntegrityError as e:
                    if "UNIQUE" not in str(e):
                        raise
                    raise DuplicateCurrencyError(
                        f"multiplier for {currency_code} already exists"
                    ) from e
                conn.commit()
            finally:
                conn.close()
        return self.get_multiplier(multiplier_id)

    def delete_multiplier(self, multiplier_id: int) -> bool:
        conn = self._connect()
        try:
            cur = conn.execute(
                "DELETE FROM currency_multipliers WHERE id=?", (multiplier_id,)
            )
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()

    def multiplier_map(self) -> Dict[str, Dict[str, Optional[float]]]:
        """Rows keyed by currency code, as served to storefront clients."""
        return {
            row["currency_code"]: {
                "multiplier": row["multiplier"],
                "rate_to_inr": row["rate_to_inr"],
            }
            for row in self.list_multipliers()
        }
