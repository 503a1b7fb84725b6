"""Storage of users in the database."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from gophermart.dbhelpers import Database, convert_error, time_to_timestamp, timestamp_to_time
from gophermart.models import User

_CREATE_USER = (
    "INSERT INTO users (login, password_hash, created, updated) VALUES (?, ?, ?, ?)"
)
_GET_USER_BY_LOGIN = (
    "SELECT id, login, password_hash, created, updated FROM users WHERE login = ?"
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


class UsersTable:
    """Users kept in the users table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create_user(self, login: str, password_hash: str) -> None:
        """Insert a user; AlreadyExistsError if the login is taken."""
        now = time_to_timestamp(datetime.now())
        with _db_errors():
            self._db.execute(_CREATE_USER, (login, password_hash, now, now))

    def get_user_by_login(self, login: str) -> User:
        """Return the user with this login; NotFoundError if there is none."""
        with _db_errors():
            row = self._db.query_row(_GET_USER_BY_LOGIN, (login,))
        return User(
            id=int(row["id"]),
            login=row["login"],
            password_hash=row["password_hash"],
            created=timestamp_to_time(row["created"]),
            updated=timestamp_to_time(row["updated"]),
        )