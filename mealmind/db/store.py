"""Named-collection snapshot store on top of SQLite.

Each collection (inventory, saved recipes, ...) is one JSON document that is
read and written whole. Repositories do their read-modify-write in memory;
there is no locking, so two overlapping writers to the same collection can
lose an update. With one user driving one process this does not occur.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from .schema import ensure_schema

logger = logging.getLogger(__name__)

PRODUCTS = "products"
SAVED_RECIPES = "saved_recipes"
RECIPE_HISTORY = "recipe_history"
SHOPPING_LIST = "shopping_list"
USER_STATS = "user_stats"
ONBOARDING = "onboarding"


class CollectionStore:
    """Manages the collections table.

    Storage failures are logged and degrade to the default value (reads) or
    a skipped write, so a broken database never takes the caller down.
    """

    def __init__(self, db_path: str | Path = "~/.config/mealmind/mealmind.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def get(self, name: str, default: Any = None) -> Any:
        """Return the decoded snapshot of ``name`` or ``default``."""
        try:
            row = self._get_conn().execute(
                "SELECT payload FROM collections WHERE name = ?", (name,)
            ).fetchone()
        except sqlite3.Error:
            logger.exception("Error reading collection %s", name)
            return default
        if row is None:
            return default
        try:
            return json.loads(row["payload"])
        except json.JSONDecodeError:
            logger.exception("Corrupt snapshot in collection %s", name)
            return default

    def set(self, name: str, value: Any) -> None:
        """Replace the snapshot of ``name``."""
        payload = json.dumps(value, ensure_ascii=False)
        try:
            conn = self._get_conn()
            conn.execute(
                """INSERT INTO collections (name, payload, updated_at)
                   VALUES (?, ?, datetime('now', 'localtime'))
                   ON CONFLICT(name) DO UPDATE SET
                       payload = excluded.payload,
                       updated_at = excluded.updated_at""",
                (name, payload),
            )
            conn.commit()
        except sqlite3.Error:
            logger.exception("Error saving collection %s", name)

    def delete(self, name: str) -> None:
        try:
            conn = self._get_conn()
            conn.execute("DELETE FROM collections WHERE name = ?", (name,))
            conn.commit()
        except sqlite3.Error:
            logger.exception("Error deleting collection %s", name)

    def names(self) -> list[str]:
        try:
            rows = self._get_conn().execute(
                "SELECT name FROM collections ORDER BY name"
            ).fetchall()
        except sqlite3.Error:
            logger.exception("Error listing collections")
            return []
        return [r["name"] for r in rows]

    def clear(self) -> None:
        """Remove every collection."""
        try:
            conn = self._get_conn()
            conn.execute("DELETE FROM collections")
            conn.commit()
        except sqlite3.Error:
            logger.exception("Error clearing collections")
