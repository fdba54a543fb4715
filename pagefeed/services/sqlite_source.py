#!/usr/bin/env python3
"""
SQLite data source
Serves keyset-paginated pages where each collection path is a table
"""

import asyncio
import logging
import re
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from pagefeed.core.errors import InvalidConfiguration, InvalidCursor, SourceFetchError
from pagefeed.domain.records import Cursor, Record, SortDirection
from pagefeed.services.cursor_codec import CursorCodec

logger = logging.getLogger("PageFeed.SqliteSource")

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
COLUMN_TYPES = {"TEXT", "INTEGER", "REAL", "BLOB", "NUMERIC"}
ROWID_COLUMN = "_pagefeed_rowid"


def _check_identifier(name: str) -> str:
    if not isinstance(name, str) or not IDENTIFIER.match(name):
        raise InvalidConfiguration(f"Invalid SQL identifier: {name!r}")
    return name


class SqliteSource:
    """SQLite-backed ordered collections with thread-safe access"""

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            # Default to ~/.local/share/pagefeed/feed.db
            db_dir = Path.home() / ".local" / "share" / "pagefeed"
            db_dir.mkdir(parents=True, exist_ok=True)
            db_path = db_dir / "feed.db"

        self.db_path = str(db_path)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.lock = threading.Lock()
        logger.info(f"SQLite source opened at: {self.db_path}")

    def create_collection(self, path: str, columns: Dict[str, str]) -> None:
        """
        Create a table for a collection if it does not exist yet

        Args:
            path: Table name
            columns: Column name to SQLite type (TEXT, INTEGER, REAL, BLOB, NUMERIC)
        """
        _check_identifier(path)
        definitions = []
        for name, column_type in columns.items():
            _check_identifier(name)
            if column_type.upper() not in COLUMN_TYPES:
                raise InvalidConfiguration(f"Unsupported column type: {column_type}")
            definitions.append(f"{name} {column_type.upper()}")

        with self.lock:
            self.conn.execute(
                f"CREATE TABLE IF NOT EXISTS {path} ({', '.join(definitions)})"
            )
            self.conn.commit()

    def create_index(self, path: str, field: str) -> None:
        """Index the ordering field; rowid is implicitly the last index column"""
        _check_identifier(path)
        _check_identifier(field)
        with self.lock:
            self.conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{path}_{field} ON {path}({field})"
            )
            self.conn.commit()

    def insert(self, path: str, row: Dict[str, Any]) -> int:
        """Insert one row and return its rowid"""
        _check_identifier(path)
        names = [_check_identifier(name) for name in row]
        placeholders = ", ".join("?" * len(names))
        with self.lock:
            cursor = self.conn.execute(
                f"INSERT INTO {path} ({', '.join(names)}) VALUES ({placeholders})",
                tuple(row.values()),
            )
            self.conn.commit()
            return cursor.lastrowid

    def count(self, path: str) -> int:
        _check_identifier(path)
        with self.lock:
            return self.conn.execute(f"SELECT COUNT(*) FROM {path}").fetchone()[0]

    async def fetch_page(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[Cursor] = None,
    ) -> List[Record]:
        return await asyncio.to_thread(
            self._fetch_page_sync, path, field, direction, limit, after
        )

    def _fetch_page_sync(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[Cursor],
    ) -> List[Record]:
        try:
            _check_identifier(path)
            _check_identifier(field)
            start = CursorCodec.decode(after) if after is not None else None
        except (InvalidConfiguration, InvalidCursor) as e:
            raise SourceFetchError(str(e), path) from e

        # Validate direction to prevent SQL injection
        order = "ASC" if direction == SortDirection.ASC else "DESC"
        where_clauses = [f"{field} IS NOT NULL"]
        query_params: List[Any] = []
        if start is not None:
            operator = ">" if order == "ASC" else "<"
            where_clauses.append(f"({field}, rowid) {operator} (?, ?)")
            query_params.extend([start.value, start.key])

        query = f"""
            SELECT rowid AS {ROWID_COLUMN}, *
            FROM {path}
            WHERE {' AND '.join(where_clauses)}
            ORDER BY {field} {order}, rowid {order}
            LIMIT ?
        """
        query_params.append(limit)

        try:
            with self.lock:
                rows = self.conn.execute(query, tuple(query_params)).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Query on '{path}' failed: {e}")
            raise SourceFetchError(f"SQLite query on '{path}' failed: {e}", path) from e

        page = []
        for row in rows:
            data = {key: row[key] for key in row.keys() if key != ROWID_COLUMN}
            page.append(
                Record(
                    data=data,
                    cursor=CursorCodec.for_row(data, field, row[ROWID_COLUMN]),
                )
            )
        logger.debug(f"Fetched {len(page)} rows from '{path}' ordered by {field} {order}")
        return page

    def close(self):
        """Close database connection"""
        with self.lock:
            self.conn.close()
