# src/dictfleet/core/autocomplete.py
"""
Word autocomplete over a read-only SQLite index.

The index lives at <dir>/ecdict_wfd.db and has a table `ecdict_wfd` with a
`word` column. It is opened on the first non-empty query and closed on
shutdown.
"""

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path

log = logging.getLogger(__name__)


INDEX_FILE = "ecdict_wfd.db"
INDEX_TABLE = "ecdict_wfd"
MAX_SUGGESTIONS = 50

_QUERY = f"SELECT word FROM {INDEX_TABLE} WHERE word LIKE ? ESCAPE '\\' LIMIT ?"


class IndexQueryError(Exception):
    """The word index could not be opened or queried."""


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class AutocompleteIndex:
    def __init__(self, root: str | Path, index_file: str = INDEX_FILE, limit: int = MAX_SUGGESTIONS):
        self.path = Path(root) / index_file
        self.limit = limit
        self._conn: sqlite3.Connection | None = None
        self._lock = asyncio.Lock()
        # One connection, one statement at a time.
        self._conn_lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _connect(self) -> sqlite3.Connection:
        uri = f"{self.path.resolve().as_uri()}?mode=ro"
        return sqlite3.connect(uri, uri=True, check_same_thread=False)

    async def connection(self) -> sqlite3.Connection:
        """Open the index once, no matter how many queries race for it."""
        if self._conn is not None:
            return self._conn
        async with self._lock:
            if self._conn is None:
                try:
                    self._conn = await asyncio.to_thread(self._connect)
                except sqlite3.Error as e:
                    raise IndexQueryError(f"cannot open {self.path}: {e}") from e
                log.info("Opened word index %s", self.path)
        return self._conn

    def _fetch(self, conn: sqlite3.Connection, term: str) -> list[str]:
        with self._conn_lock:
            rows = conn.execute(_QUERY, (_like_pattern(term), self.limit)).fetchall()
        return [row[0] for row in rows]

    async def query(self, term: str | None) -> list[str]:
        """Words containing `term` (case-insensitive), at most `limit` of them."""
        if not term:
            return []
        conn = await self.connection()
        try:
            return await asyncio.to_thread(self._fetch, conn, term)
        except sqlite3.Error as e:
            raise IndexQueryError(str(e)) from e

    def _close_conn(self, conn: sqlite3.Connection) -> None:
        with self._conn_lock:
            conn.close()

    async def close(self) -> None:
        async with self._lock:
            conn, self._conn = self._conn, None
        if conn is not None:
            await asyncio.to_thread(self._close_conn, conn)
            log.info("Closed word index %s", self.path)
