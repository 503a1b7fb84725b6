"""Storage of orders in the database."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from gophermart.dbhelpers import Database, convert_error, time_to_timestamp, timestamp_to_time
from gophermart.models import Order, OrderStatus

_COLUMNS = "id, number, user_id, status, accrual, created, updated"

_CREATE_ORDER = (
    "INSERT INTO orders (number, user_id, status, accrual, created, updated) "
    "VALUES (?, ?, ?, ?, ?, ?)"
)
_GET_ORDER_BY_NUMBER = f"SELECT {_COLUMNS} FROM orders WHERE number = ?"
_GET_ORDERS_BY_USER_ID = f"SELECT {_COLUMNS} FROM orders WHERE user_id = ?"
_GET_ORDERS_BY_LIMIT_AND_OFFSET = (
    f"SELECT {_COLUMNS} FROM orders WHERE status IN ({{placeholders}}) "
    "ORDER BY id ASC LIMIT ? OFFSET ?"
)
_GET_TOTAL_ACCRUAL_BY_USER_ID = (
    "SELECT COALESCE(SUM(accrual), 0) AS total_accrual FROM orders "
    "WHERE user_id = ? AND status = ?"
)
_UPDATE_ORDER = "UPDATE orders SET status = ?, accrual = ?, updated = ? WHERE number = ?"

_PENDING_STATUSES = (OrderStatus.NEW, OrderStatus.PROCESSING)


@contextmanager
def _db_errors() -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        converted = convert_error(exc)
        if converted is exc:
            raise
        raise converted from exc


def _to_order(row: sqlite3.Row) -> Order:
    return Order(
        id=int(row["id"]),
        number=row["number"],
        user_id=int(row["user_id"]),
        status=OrderStatus(row["status"]),
        accrual=float(row["accrual"]),
        created=timestamp_to_time(row["created"]),
        updated=timestamp_to_time(row["updated"]),
    )


class OrdersTable:
    """Orders kept in the orders table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create_order(self, user_id: int, number: str, status: OrderStatus, accrual: float) -> None:
        """Insert an order; AlreadyExistsError if the number is taken."""
        now = time_to_timestamp(datetime.now())
        with _db_errors():
            self._db.execute(
                _CREATE_ORDER,
                (number, int(user_id), int(status), float(accrual), now, now),
            )

    def get_order_by_number(self, number: str) -> Order:
        """Return the order with this number; NotFoundError if there is none."""
        with _db_errors():
            row = self._db.query_row(_GET_ORDER_BY_NUMBER, (number,))
        return _to_order(row)

    def get_orders_by_user_id(self, user_id: int) -> list[Order]:
        """Return every order of a user."""
        with _db_errors():
            rows = self._db.query(_GET_ORDERS_BY_USER_ID, (int(user_id),))
        return [_to_order(row) for row in rows]

    def get_orders_by_limit_and_offset(self, limit: int, offset: int) -> list[Order]:
        """Return a page, ordered by id, of orders that are new or in processing."""
        query = _GET_ORDERS_BY_LIMIT_AND_OFFSET.format(
            placeholders=", ".join("?" for _ in _PENDING_STATUSES)
        )
        params = [int(status) for status in _PENDING_STATUSES] + [int(limit), int(offset)]
        with _db_errors():
            rows = self._db.query(query, params)
        return [_to_order(row) for row in rows]

    def update_order(self, number: str, status: OrderStatus, accrual: float) -> None:
        """Set an order's status and accrual."""
        now = time_to_timestamp(datetime.now())
        with _db_errors():
            self._db.execute(_UPDATE_ORDER, (int(status), float(accrual), now, number))

    def get_total_accrual_by_user_id(self, user_id: int) -> float:
        """Return the sum of accruals over a user's processed orders."""
        with _db_errors():
            row = self._db.query_row(
                _GET_TOTAL_ACCRUAL_BY_USER_ID,
                (int(user_id), int(OrderStatus.PROCESSED)),
            )
        return float(row["total_accrual"])