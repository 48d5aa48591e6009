"""SQLite storage of website status checks."""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from dataclasses import dataclass
from os import PathLike

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "uptime.db"

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS status_checks ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT,"
    "timestamp INTEGER NOT NULL,"
    "url TEXT NOT NULL,"
    "is_up INTEGER NOT NULL,"
    "response_code INTEGER NOT NULL,"
    "response_time REAL NOT NULL"
    ");"
)


class StorageError(RuntimeError):
    """Raised when the status store cannot be used."""


@dataclass(frozen=True)
class StatusHistoryEntry:
    """One point of a site's history: 1 = up, 0 = down, -1 = unknown."""

    timestamp: int
    is_up: int


@dataclass(frozen=True)
class LatestStatus:
    """The most recent check recorded for a site."""

    is_up: int
    code: int
    response_time: float
    timestamp: int


class StatusStore:
    """A thread-safe store of status checks backed by an SQLite database."""

    def __init__(self, path: str | PathLike[str] = DEFAULT_DB_PATH) -> None:
        try:
            self._conn: sqlite3.Connection | None = sqlite3.connect(
                path, check_same_thread=False
            )
            self._conn.execute(_SCHEMA)
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database: {exc}") from exc
        self._lock = threading.Lock()
        logger.info("Database setup complete.")

    def close(self) -> None:
        """Close the database; further use raises ``StorageError``."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> StatusStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Database not initialized.")
        return self._conn

    def record_status(
        self,
        url: str,
        is_up: int,
        code: int,
        response_time: float,
        timestamp: int | None = None,
    ) -> None:
        """Store one check result, stamped with ``timestamp`` or the current time."""
        if timestamp is None:
            timestamp = int(time.time())
        with self._lock:
            conn = self._connection()
            conn.execute(
                "INSERT INTO status_checks "
                "(timestamp, url, is_up, response_code, response_time) "
                "VALUES (?, ?, ?, ?, ?);",
                (int(timestamp), url, int(is_up), int(code), float(response_time)),
            )
            conn.commit()
        logger.info(
            "Status recorded for %s: %s (code: %d, time: %.2fs)",
            url,
            "UP" if is_up else "DOWN",
            code,
            response_time,
        )

    def latest_status(self, url: str) -> LatestStatus | None:
        """Return the latest check for ``url``, or None if it was never checked."""
        with self._lock:
            row = self._connection().execute(
                "SELECT is_up, response_code, response_time, timestamp "
                "FROM status_checks WHERE url = ? "
                "ORDER BY timestamp DESC, id DESC LIMIT 1;",
                (url,),
            ).fetchone()
        if row is None:
            logger.debug("No records found for URL: %s", url)
            return None
        return LatestStatus(is_up=row[0], code=row[1], response_time=row[2], timestamp=row[3])

    def last_check_time(self, url: str) -> int | None:
        """Return the Unix time of the latest check for ``url``, or None."""
        latest = self.latest_status(url)
        return None if latest is None else latest.timestamp

    def recent_history(self, url: str, limit: int = 24) -> list[StatusHistoryEntry]:
        """Return up to ``limit`` most recent checks for ``url``, oldest first."""
        if limit <= 0:
            raise ValueError("limit must be positive")
        with self._lock:
            rows = self._connection().execute(
                "SELECT timestamp, is_up FROM ("
                "  SELECT id, timestamp, is_up FROM status_checks "
                "  WHERE url = ? ORDER BY timestamp DESC, id DESC LIMIT ?"
                ") ORDER BY timestamp ASC, id ASC;",
                (url, limit),
            ).fetchall()
        return [StatusHistoryEntry(timestamp=ts, is_up=up) for ts, up in rows]