"""Durable SQLite table of known application paths."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any

from launchdb.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

__all__ = ["ApplicationStore"]

_TABLE = "applications"


def _like_suffix(suffix: str) -> str:
    escaped = suffix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}"


class ApplicationStore:
    """Set of canonical application paths persisted in a single-column table.

    No operation raises on ordinary SQL failure: every method reports failure
    through its return value and logs the cause. Paths are compared verbatim,
    so callers canonicalize before calling in.
    """

    def __init__(self, database_path: str | Path, secondary_suffix: str = ".desktop") -> None:
        self._database_path = Path(database_path)
        self._secondary_suffix = secondary_suffix
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def database_path(self) -> Path:
        return self._database_path

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._conn is not None

    # ----- Connection -----

    def open(self) -> bool:
        """Connect to the database, creating its directory and table if absent."""
        with self._lock:
            if self._conn is not None:
                return True
            try:
                self._database_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = sqlite3.connect(str(self._database_path), check_same_thread=False)
            except (OSError, sqlite3.Error) as e:
                logger.error("Connection with database %s failed: %s", self._database_path, e)
                self._conn = None
                return False
        self.ensure_schema()
        return True

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreUnavailableError(database_path=str(self._database_path))
        return self._conn

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> int:
        with self._lock:
            conn = self._connection()
            with conn:
                return conn.execute(sql, params).rowcount

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[tuple[Any, ...]]:
        with self._lock:
            return self._connection().execute(sql, params).fetchall()

    # ----- Schema -----

    def ensure_schema(self) -> bool:
        """Create the applications table.

        Returns True only if this call created it. An existing table is
        reported as False, so the result is not a health signal.
        """
        try:
            self._execute(f"CREATE TABLE {_TABLE}(path TEXT PRIMARY KEY)")
        except (sqlite3.Error, StoreUnavailableError) as e:
            logger.debug("Couldn't create table '%s': %s", _TABLE, e)
            return False
        return True

    # ----- Mutation -----

    def add(self, path: str) -> bool:
        """Insert ``path``. Inserting an existing path is a successful no-op."""
        if not path:
            logger.warning("Add application failed: path cannot be empty")
            return False
        try:
            self._execute(f"INSERT OR IGNORE INTO {_TABLE} (path) VALUES (?)", (path,))
        except (sqlite3.Error, StoreUnavailableError) as e:
            logger.error("Add application failed for %s: %s", path, e)
            return False
        return True

    def remove(self, path: str) -> bool:
        """Delete ``path`` if present. Returns False when it was not stored."""
        with self._lock:
            if not self.exists(path):
                return False
            try:
                self._execute(f"DELETE FROM {_TABLE} WHERE path = ?", (path,))
            except (sqlite3.Error, StoreUnavailableError) as e:
                logger.error("Remove application failed for %s: %s", path, e)
                return False
            return True

    def remove_all(self) -> bool:
        try:
            self._execute(f"DELETE FROM {_TABLE}")
        except (sqlite3.Error, StoreUnavailableError) as e:
            logger.error("Remove all applications failed: %s", e)
            return False
        return True

    # ----- Query Methods -----

    def exists(self, path: str) -> bool:
        try:
            rows = self._query(f"SELECT path FROM {_TABLE} WHERE path = ?", (path,))
        except (sqlite3.Error, StoreUnavailableError) as e:
            logger.error("Application exists check failed for %s: %s", path, e)
            return False
        return bool(rows)

    def count(self) -> int:
        try:
            rows = self._query(f"SELECT COUNT(*) FROM {_TABLE}")
        except (sqlite3.Error, StoreUnavailableError) as e:
            logger.error("Counting applications failed: %s", e)
            return 0
        return int(rows[0][0]) if rows else 0

    def list_all(self) -> list[str]:
        """Return every stored path, secondary-suffix entries last.

        Entries ending in the secondary suffix (``.desktop`` by default) are a
        fallback class of launchable, so callers taking the first match for a
        content type prefer everything else. Order within each group is
        whatever SQLite returns.
        """
        pattern = _like_suffix(self._secondary_suffix)
        try:
            primary = self._query(
                f"SELECT path FROM {_TABLE} WHERE path NOT LIKE ? ESCAPE '\\'", (pattern,)
            )
            secondary = self._query(
                f"SELECT path FROM {_TABLE} WHERE path LIKE ? ESCAPE '\\'", (pattern,)
            )
        except (sqlite3.Error, StoreUnavailableError) as e:
            logger.error("Listing applications failed: %s", e)
            return []
        return [row[0] for row in primary] + [row[0] for row in secondary]
