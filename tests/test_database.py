import sqlite3

import pytest

from gophermart.database import DatabaseClient
from gophermart.models import AlreadyExistsError, OrderStatus


def test_creates_all_tables():
    with DatabaseClient(":memory:") as client:
        rows = client.db.query("SELECT name FROM sqlite_master WHERE type = 'table'")
    names = {row["name"] for row in rows if not row["name"].startswith("sqlite_")}
    assert names == {"users", "orders", "withdrawals"}


def test_reopening_keeps_data(tmp_path):
    path = tmp_path / "gophermart.db"
    with DatabaseClient(path) as client:
        client.users_table.create_user("alice", "hash")
    with DatabaseClient(path) as client:
        user = client.users_table.get_user_by_login("alice")
    assert user.login == "alice"
    assert user.password_hash == "hash"


def test_tables_work_together():
    with DatabaseClient(":memory:") as client:
        client.users_table.create_user("alice", "hash")
        user = client.users_table.get_user_by_login("alice")
        client.orders_table.create_order(user.id, "12345678903", OrderStatus.NEW, 0)
        client.withdrawals_table.create_withdrawal(user.id, "2377225624", 3.5)
        orders = client.orders_table.get_orders_by_user_id(user.id)
        withdrawals = client.withdrawals_table.get_withdrawals_by_user_id(user.id)
    assert [o.number for o in orders] == ["12345678903"]
    assert [w.order for w in withdrawals] == ["2377225624"]


def test_unique_login():
    with DatabaseClient(":memory:") as client:
        client.users_table.create_user("alice", "hash")
        with pytest.raises(AlreadyExistsError):
            client.users_table.create_user("alice", "other")


def test_foreign_keys_enforced():
    with DatabaseClient(":memory:") as client:
        with pytest.raises(sqlite3.IntegrityError):
            client.orders_table.create_order(999, "12345678903", OrderStatus.NEW, 0)


def test_closed_after_context():
    with DatabaseClient(":memory:") as client:
        pass
    with pytest.raises(sqlite3.ProgrammingError):
        client.db.query("SELECT 1")


def test_unopenable_path(tmp_path):
    with pytest.raises(sqlite3.OperationalError):
        DatabaseClient(tmp_path / "missing" / "dir" / "gophermart.db")