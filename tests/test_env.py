import pytest

from gophermart.env import get_bool_from_env, get_int_from_env, get_str_from_env

NAME = "GOPHERMART_TEST_VAR"


def test_str_missing(monkeypatch):
    monkeypatch.delenv(NAME, raising=False)
    assert get_str_from_env(NAME) is None


def test_str_present_and_empty(monkeypatch):
    monkeypatch.setenv(NAME, "value")
    assert get_str_from_env(NAME) == "value"
    monkeypatch.setenv(NAME, "")
    assert get_str_from_env(NAME) == ""


@pytest.mark.parametrize("raw, expected", [("42", 42), ("-7", -7), ("+3", 3)])
def test_int_valid(monkeypatch, raw, expected):
    monkeypatch.setenv(NAME, raw)
    assert get_int_from_env(NAME) == expected


@pytest.mark.parametrize("raw", ["abc", " 4", "1_000", ""])
def test_int_invalid(monkeypatch, raw):
    monkeypatch.setenv(NAME, raw)
    with pytest.raises(ValueError):
        get_int_from_env(NAME)


def test_int_missing(monkeypatch):
    monkeypatch.delenv(NAME, raising=False)
    assert get_int_from_env(NAME) is None


@pytest.mark.parametrize("raw, expected", [(" TRUE ", True), ("false", False), ("True", True)])
def test_bool_valid(monkeypatch, raw, expected):
    monkeypatch.setenv(NAME, raw)
    assert get_bool_from_env(NAME) is expected


def test_bool_invalid(monkeypatch):
    monkeypatch.setenv(NAME, "yes")
    with pytest.raises(ValueError, match="invalid value for boolean variable"):
        get_bool_from_env(NAME)


def test_bool_missing(monkeypatch):
    monkeypatch.delenv(NAME, raising=False)
    assert get_bool_from_env(NAME) is None