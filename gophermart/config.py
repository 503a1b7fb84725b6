"""Command-line and environment configuration."""

from __future__ import annotations

import argparse
import dataclasses
import re
from dataclasses import dataclass
from typing import Sequence

from gophermart.env import get_bool_from_env, get_str_from_env

DEFAULT_ADDR = "localhost:8080"

ENV_IS_DEV = "IS_DEV"
ENV_RUN_ADDRESS = "RUN_ADDRESS"
ENV_DATABASE_URI = "DATABASE_URI"
ENV_ACCRUAL_SYSTEM_ADDRESS = "ACCRUAL_SYSTEM_ADDRESS"

_PORT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class AppArgs:
    """Settings the application starts with."""

    is_dev: bool = False
    addr: str = DEFAULT_ADDR
    database_conn_str: str = ""
    accrual_host: str = ""


@dataclass(frozen=True)
class NetAddress:
    """A host and port pair."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


def parse_net_address(value: str) -> NetAddress:
    """Parse "<host>:<port>"; raises ValueError on a malformed address."""
    parts = value.split(":")
    if len(parts) != 2:
        raise ValueError("invalid address format")
    host, port = parts
    if not _PORT_RE.fullmatch(port):
        raise ValueError(f"invalid port: {port!r}")
    return NetAddress(host, int(port))


def _address_arg(value: str) -> NetAddress:
    try:
        return parse_net_address(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_app_args(argv: Sequence[str] | None = None) -> AppArgs:
    """Read settings from the command line, then let the environment override them."""
    parser = argparse.ArgumentParser(prog="gophermart")
    parser.add_argument(
        "-a", type=_address_arg, default=None,
        help="address of gophermart server in form <host:port>",
    )
    parser.add_argument("-d", default="", help="connection string for the database")
    parser.add_argument("-r", default="", help="base url of accrual system")
    ns = parser.parse_args(argv)

    args = AppArgs(
        addr=str(ns.a) if ns.a is not None else DEFAULT_ADDR,
        database_conn_str=ns.d,
        accrual_host=ns.r,
    )
    return override_app_args_with_env(args)


def override_app_args_with_env(args: AppArgs) -> AppArgs:
    """Return args with every value that is set in the environment taking precedence."""
    changes: dict[str, object] = {}

    is_dev = get_bool_from_env(ENV_IS_DEV)
    if is_dev is not None:
        changes["is_dev"] = is_dev

    for field, env_name in (
        ("addr", ENV_RUN_ADDRESS),
        ("database_conn_str", ENV_DATABASE_URI),
        ("accrual_host", ENV_ACCRUAL_SYSTEM_ADDRESS),
    ):
        value = get_str_from_env(env_name)
        if value is not None:
            changes[field] = value

    return dataclasses.replace(args, **changes)