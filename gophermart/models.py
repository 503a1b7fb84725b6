"""Domain models and domain errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


class GophermartError(Exception):
    """Base class for domain errors."""

    default_message = "gophermart error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class NotFoundError(GophermartError):
    """The requested object does not exist."""

    default_message = "not found"


class AlreadyExistsError(GophermartError):
    """The object is not unique."""

    default_message = "already exists"


class FailedToMatchError(GophermartError):
    """Two values could not be matched."""

    default_message = "failed to match"


class InvalidOrderNumError(GophermartError):
    """The order number is not valid."""

    default_message = "invalid order number"


class InsufficientBalanceError(GophermartError):
    """The balance is too low for the operation."""

    default_message = "insufficient balance"


class OrderStatus(enum.IntEnum):
    """Processing status of an order."""

    NEW = 0
    PROCESSING = 1
    INVALID = 2
    PROCESSED = 3

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class User:
    """A registered user."""

    id: int
    login: str
    password_hash: str
    created: datetime
    updated: datetime


@dataclass(frozen=True)
class Order:
    """An order uploaded by a user."""

    id: int
    number: str
    user_id: int
    status: OrderStatus
    accrual: float
    created: datetime
    updated: datetime


@dataclass(frozen=True)
class Withdrawal:
    """A withdrawal of points against an order."""

    id: int
    order: str
    amount: float
    user_id: int
    created: datetime
    updated: datetime