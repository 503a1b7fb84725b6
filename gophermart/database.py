"""Database client: opens the connection and makes sure every table exists."""

from __future__ import annotations

import os

from gophermart.dbhelpers import Database
from gophermart.orders_table import OrdersTable
from gophermart.users_table import UsersTable
from gophermart.withdrawals_table import WithdrawalsTable

_CREATE_USERS = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    login VARCHAR(50) NOT NULL UNIQUE,
    password_hash VARCHAR(64) NOT NULL,
    created TIMESTAMP NOT NULL,
    updated TIMESTAMP NOT NULL
)
"""

_CREATE_ORDERS = """
CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    number TEXT NOT NULL UNIQUE,
    user_id INT REFERENCES users(id),
    status SMALLINT NOT NULL,
    accrual REAL NOT NULL,
    created TIMESTAMP NOT NULL,
    updated TIMESTAMP NOT NULL
)
"""

_CREATE_WITHDRAWALS = """
CREATE TABLE IF NOT EXISTS withdrawals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_id TEXT NOT NULL UNIQUE,
    "sum" REAL NOT NULL,
    user_id INT REFERENCES users(id),
    created TIMESTAMP NOT NULL,
    updated TIMESTAMP NOT NULL
)
"""

_TABLES = (_CREATE_USERS, _CREATE_ORDERS, _CREATE_WITHDRAWALS)


class DatabaseClient:
    """Owns the database connection and the tables built on it."""

    def __init__(self, conn_str: str | os.PathLike[str]) -> None:
        self.db = Database(conn_str)
        try:
            for statement in _TABLES:
                self.db.execute(statement)
        except Exception:
            self.db.close()
            raise

        self.users_table = UsersTable(self.db)
        self.orders_table = OrdersTable(self.db)
        self.withdrawals_table = WithdrawalsTable(self.db)

    def close(self) -> None:
        """Close the connection."""
        self.db.close()

    def __enter__(self) -> DatabaseClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()