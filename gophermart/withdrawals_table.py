"""Storage of withdrawals in the database."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from gophermart.dbhelpers import Database, convert_error, time_to_timestamp, timestamp_to_time
from gophermart.models import Withdrawal

_CREATE_WITHDRAWAL = (
    'INSERT INTO withdrawals (order_id, "sum", user_id, created, updated) '
    "VALUES (?, ?, ?, ?, ?)"
)
_GET_TOTAL_WITHDRAWN_BY_USER_ID = (
    'SELECT COALESCE(SUM("sum"), 0) AS total_withdrawn FROM withdrawals WHERE user_id = ?'
)
_GET_WITHDRAWALS_BY_USER_ID = (
    'SELECT id, order_id, "sum", user_id, created, updated FROM withdrawals WHERE user_id = ?'
)


@contextmanager
def _db_errors() -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        converted = convert_error(exc)
        if converted is exc:
            raise
        raise converted from exc


def _to_withdrawal(row: sqlite3.Row) -> Withdrawal:
    return Withdrawal(
        id=int(row["id"]),
        order=row["order_id"],
        amount=float(row["sum"]),
        user_id=int(row["user_id"]),
        created=timestamp_to_time(row["created"]),
        updated=timestamp_to_time(row["updated"]),
    )


class WithdrawalsTable:
    """Withdrawals kept in the withdrawals table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create_withdrawal(self, user_id: int, order: str, amount: float) -> None:
        """Insert a withdrawal; AlreadyExistsError if the order was already used."""
        now = time_to_timestamp(datetime.now())
        with _db_errors():
            self._db.execute(_CREATE_WITHDRAWAL, (order, float(amount), int(user_id), now, now))

    def get_withdrawals_by_user_id(self, user_id: int) -> list[Withdrawal]:
        """Return every withdrawal of a user."""
        with _db_errors():
            rows = self._db.query(_GET_WITHDRAWALS_BY_USER_ID, (int(user_id),))
        return [_to_withdrawal(row) for row in rows]

    def get_total_withdrawn_by_user_id(self, user_id: int) -> float:
        """Return the sum of all withdrawals of a user."""
        with _db_errors():
            row = self._db.query_row(_GET_TOTAL_WITHDRAWN_BY_USER_ID, (int(user_id),))
        return float(row["total_withdrawn"])