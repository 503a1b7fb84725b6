from unittest import mock

import pytest

from gophermart.memstorage import TOKEN_LIFETIME, MemStorage
from gophermart.models import NotFoundError


def _at(moment):
    return mock.patch("gophermart.memstorage.time.monotonic", return_value=moment)


def test_set_and_get():
    storage = MemStorage()
    storage.set_token(7, "token")
    assert storage.get_by_token("token") == 7


def test_unknown_token():
    with pytest.raises(NotFoundError):
        MemStorage().get_by_token("token")


def test_new_token_replaces_old_one_of_same_user():
    storage = MemStorage()
    storage.set_token(1, "first")
    storage.set_token(2, "other")
    storage.set_token(1, "second")
    assert storage.get_by_token("second") == 1
    assert storage.get_by_token("other") == 2
    with pytest.raises(NotFoundError):
        storage.get_by_token("first")


def test_refresh_unknown_token():
    with pytest.raises(NotFoundError):
        MemStorage().refresh_token("token")


def test_clear_expired_tokens():
    storage = MemStorage()
    with _at(0.0):
        storage.set_token(1, "token")
    with _at(TOKEN_LIFETIME - 1):
        storage.clear_expired_tokens()
    assert storage.get_by_token("token") == 1
    with _at(TOKEN_LIFETIME):
        storage.clear_expired_tokens()
    with pytest.raises(NotFoundError):
        storage.get_by_token("token")


def test_refresh_extends_lifetime():
    storage = MemStorage()
    with _at(0.0):
        storage.set_token(3, "token")
    with _at(TOKEN_LIFETIME - 1):
        storage.refresh_token("token")
    with _at(TOKEN_LIFETIME + 1):
        storage.clear_expired_tokens()
    assert storage.get_by_token("token") == 3
    with _at(2 * TOKEN_LIFETIME):
        storage.clear_expired_tokens()
    with pytest.raises(NotFoundError):
        storage.get_by_token("token")