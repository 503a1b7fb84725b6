import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from gophermart.dbhelpers import Database, convert_error, time_to_timestamp, timestamp_to_time
from gophermart.models import AlreadyExistsError, NotFoundError


@pytest.fixture
def db():
    database = Database(":memory:")
    database.execute("CREATE TABLE items (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL UNIQUE)")
    yield database
    database.close()


def test_timestamp_round_trip():
    moment = datetime(2024, 5, 1, 12, 30, 45, 123456)
    assert timestamp_to_time(time_to_timestamp(moment)) == moment


def test_timestamp_format():
    assert time_to_timestamp(datetime(2024, 5, 1, 12, 30, 45)) == "2024-05-01 12:30:45"


def test_timestamp_discards_time_zone():
    naive = datetime(2024, 5, 1, 12, 0, 0)
    aware = naive.replace(tzinfo=timezone(timedelta(hours=3)))
    assert time_to_timestamp(aware) == time_to_timestamp(naive)


def test_execute_and_query(db):
    assert db.execute("INSERT INTO items (name) VALUES (?)", ["first"]) == 1
    db.execute("INSERT INTO items (name) VALUES (?)", ["second"])
    rows = db.query("SELECT name FROM items ORDER BY id")
    assert [row["name"] for row in rows] == ["first", "second"]


def test_query_row_returns_first(db):
    db.execute("INSERT INTO items (name) VALUES (?)", ["only"])
    row = db.query_row("SELECT id, name FROM items WHERE name = ?", ["only"])
    assert row["name"] == "only"


def test_query_row_no_rows_converts_to_not_found(db):
    with pytest.raises(LookupError) as info:
        db.query_row("SELECT id FROM items WHERE name = ?", ["missing"])
    assert isinstance(convert_error(info.value), NotFoundError)


def test_unique_violation_converts_to_already_exists(db):
    db.execute("INSERT INTO items (name) VALUES (?)", ["dup"])
    with pytest.raises(sqlite3.IntegrityError) as info:
        db.execute("INSERT INTO items (name) VALUES (?)", ["dup"])
    assert isinstance(convert_error(info.value), AlreadyExistsError)


def test_other_errors_pass_through():
    error = ValueError("boom")
    assert convert_error(error) is error


def test_not_null_violation_is_not_converted(db):
    with pytest.raises(sqlite3.IntegrityError) as info:
        db.execute("INSERT INTO items (name) VALUES (?)", [None])
    assert convert_error(info.value) is info.value


def test_foreign_keys_enforced(db):
    db.execute("CREATE TABLE refs (id INTEGER PRIMARY KEY, item_id INT REFERENCES items(id))")
    with pytest.raises(sqlite3.IntegrityError):
        db.execute("INSERT INTO refs (item_id) VALUES (?)", [999])


def test_closed_database_rejects_queries():
    database = Database(":memory:")
    database.close()
    with pytest.raises(sqlite3.ProgrammingError):
        database.query("SELECT 1")