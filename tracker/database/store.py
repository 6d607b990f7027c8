"""SQLite store for schedule items.

Single table, keyed by an auto-assigned integer. Every mutating call
commits and then refreshes the live "all items, newest first" query so
subscribers see the new snapshot before the call returns.
"""
import sqlite3
from dataclasses import replace
from pathlib import Path
from typing import Any

from loguru import logger

from ..errors import NotFoundError, StorageError
from .live import LiveQuery
from .models import ScheduleItem

logger = logger.bind(module="database.store")

# ============== SQL Schema ==============

_INIT_SQL = """
CREATE TABLE IF NOT EXISTS schedule_item_table (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    start_time_ms  INTEGER NOT NULL,
    end_time_ms    INTEGER NOT NULL,
    quality_rating INTEGER
);
"""

_SELECT_ALL_DESC = "SELECT * FROM schedule_item_table ORDER BY id DESC"


def _row_to_item(row: sqlite3.Row) -> ScheduleItem:
    return ScheduleItem(
        id=row["id"],
        start_time_ms=row["start_time_ms"],
        end_time_ms=row["end_time_ms"],
        quality_rating=row["quality_rating"],
    )


class ScheduleStore:
    """Persistent table of schedule items with an observable list query.

    All public operations are coroutines so callers can treat the store as
    non-blocking; statements run on the event loop thread and each call
    commits on its own.
    """

    def __init__(self, db_path: str | Path = ":memory:"):
        """Initialize store.

        Args:
            db_path: SQLite database file, or ":memory:"
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path).expanduser()
        self._db: sqlite3.Connection | None = None
        self._all_items: LiveQuery[list[ScheduleItem]] | None = None

    # ============== Lifecycle ==============

    async def initialize(self) -> None:
        """Open the database and create the table if needed."""
        if self._db is not None:
            return
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._db = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self._db.row_factory = sqlite3.Row
            self._db.execute("PRAGMA journal_mode=WAL")
            self._db.execute("PRAGMA synchronous=NORMAL")
            self._db.executescript(_INIT_SQL)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to open store at {self.db_path}: {e}")
            raise StorageError(f"Failed to open store: {e}") from e

        self._all_items = LiveQuery(self._fetch_all_descending)
        logger.info(
            f"Store initialized: {len(self._all_items.value)} items in {self.db_path}"
        )

    async def close(self) -> None:
        """Close store."""
        if self._db:
            self._db.close()
            self._db = None
            logger.info(f"Store closed: {self.db_path}")

    # ============== Internals ==============

    def _conn(self) -> sqlite3.Connection:
        if self._db is None:
            raise StorageError("Store is not initialized")
        return self._db

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        conn = self._conn()
        try:
            return conn.execute(sql, params)
        except sqlite3.Error as e:
            logger.error(f"Query failed ({sql.split()[0]}): {e}")
            raise StorageError(str(e)) from e

    def _write(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        """Run a mutating statement in its own transaction."""
        conn = self._conn()
        try:
            with conn:
                return conn.execute(sql, params)
        except sqlite3.Error as e:
            logger.error(f"Write failed ({sql.split()[0]}): {e}")
            raise StorageError(str(e)) from e

    def _fetch_all_descending(self) -> list[ScheduleItem]:
        rows = self._execute(_SELECT_ALL_DESC).fetchall()
        return [_row_to_item(row) for row in rows]

    def _invalidate(self) -> None:
        """Refresh the live list after a committed write.

        The write is already durable here, so a failed re-query is logged
        and subscribers keep the previous snapshot until the next write.
        """
        if self._all_items is None:
            return
        try:
            self._all_items.refresh()
        except StorageError as e:
            logger.error(f"Live list refresh failed after commit: {e}")

    # ============== CRUD ==============

    async def insert(self, item: ScheduleItem) -> ScheduleItem:
        """Insert a new item and return it with its assigned key.

        Raises:
            StorageError: if the key already exists or the write fails
        """
        if item.id is None:
            cursor = self._write(
                """INSERT INTO schedule_item_table
                   (start_time_ms, end_time_ms, quality_rating)
                   VALUES (?, ?, ?)""",
                (item.start_time_ms, item.end_time_ms, item.quality_rating),
            )
        else:
            cursor = self._write(
                """INSERT INTO schedule_item_table
                   (id, start_time_ms, end_time_ms, quality_rating)
                   VALUES (?, ?, ?, ?)""",
                (item.id, item.start_time_ms, item.end_time_ms, item.quality_rating),
            )
        stored = replace(item, id=cursor.lastrowid if item.id is None else item.id)
        logger.debug(f"Inserted schedule item {stored.id}")
        self._invalidate()
        return stored

    async def update_by_key(self, item: ScheduleItem) -> None:
        """Replace the row whose key equals ``item.id``.

        Raises:
            NotFoundError: if no row has that key
        """
        cursor = self._write(
            """UPDATE schedule_item_table
               SET start_time_ms = ?, end_time_ms = ?, quality_rating = ?
               WHERE id = ?""",
            (item.start_time_ms, item.end_time_ms, item.quality_rating, item.id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(item.id)
        logger.debug(f"Updated schedule item {item.id}")
        self._invalidate()

    async def get_by_key(self, key: int) -> ScheduleItem | None:
        """Get an item by key."""
        row = self._execute(
            "SELECT * FROM schedule_item_table WHERE id = ?", (key,)
        ).fetchone()
        return _row_to_item(row) if row else None

    async def clear_all(self) -> int:
        """Delete every row. The table itself is kept.

        Returns:
            Number of rows deleted
        """
        cursor = self._write("DELETE FROM schedule_item_table")
        logger.info(f"Cleared {cursor.rowcount} schedule items")
        self._invalidate()
        return cursor.rowcount

    # ============== Queries ==============

    def list_all_descending(self) -> LiveQuery[list[ScheduleItem]]:
        """Observable list of all items, newest key first."""
        if self._all_items is None:
            raise StorageError("Store is not initialized")
        return self._all_items

    async def get_all_descending(self) -> list[ScheduleItem]:
        """One-shot fetch of all items, newest key first."""
        return self._fetch_all_descending()

    async def get_most_recent(self) -> ScheduleItem | None:
        """Get the item with the highest key."""
        row = self._execute(
            "SELECT * FROM schedule_item_table ORDER BY id DESC LIMIT 1"
        ).fetchone()
        return _row_to_item(row) if row else None

    async def count(self) -> int:
        row = self._execute(
            "SELECT COUNT(*) AS cnt FROM schedule_item_table"
        ).fetchone()
        return row["cnt"] if row else 0
