"""Database connection wrapper, error conversion and timestamp helpers."""

from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime
from typing import Any, Sequence

from gophermart.models import AlreadyExistsError, NotFoundError

_TIMESTAMP_SEP = " "


class _NoRowsError(LookupError):
    """A single-row query found nothing."""

    def __init__(self) -> None:
        super().__init__("no rows in result set")


def convert_error(error: BaseException) -> BaseException:
    """Map a database error to the matching domain error, or return it unchanged."""
    if isinstance(error, _NoRowsError):
        return NotFoundError()
    if isinstance(error, sqlite3.IntegrityError) and "UNIQUE constraint failed" in str(error):
        return AlreadyExistsError()
    return error


def time_to_timestamp(value: datetime) -> str:
    """Encode a datetime as a timestamp without time zone (wall-clock time is kept)."""
    return value.replace(tzinfo=None).isoformat(sep=_TIMESTAMP_SEP)


def timestamp_to_time(value: str) -> datetime:
    """Decode a stored timestamp into a naive datetime."""
    return datetime.fromisoformat(value)


class Database:
    """A thread-safe SQLite connection in autocommit mode with foreign keys enforced."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.Lock()

    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a statement; return the number of rows it changed."""
        with self._lock:
            return self._conn.execute(query, tuple(params)).rowcount

    def query(self, query: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        """Run a query and return all of its rows."""
        with self._lock:
            return self._conn.execute(query, tuple(params)).fetchall()

    def query_row(self, query: str, params: Sequence[Any] = ()) -> sqlite3.Row:
        """Run a query and return its first row; LookupError if there is none."""
        with self._lock:
            row = self._conn.execute(query, tuple(params)).fetchone()
        if row is None:
            raise _NoRowsError()
        return row

    def close(self) -> None:
        """Close the connection."""
        with self._lock:
            self._conn.close()