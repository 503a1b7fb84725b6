"""Repositories that sit between the use cases and the storages."""

from __future__ import annotations

from typing import Protocol

from gophermart.models import Order, OrderStatus, User, Withdrawal


class OrdersStorage(Protocol):
    """Storage of orders."""

    def create_order(self, user_id: int, number: str, status: OrderStatus, accrual: float) -> None: ...

    def get_order_by_number(self, number: str) -> Order: ...

    def get_orders_by_user_id(self, user_id: int) -> list[Order]: ...

    def get_orders_by_limit_and_offset(self, limit: int, offset: int) -> list[Order]: ...

    def update_order(self, number: str, status: OrderStatus, accrual: float) -> None: ...

    def get_total_accrual_by_user_id(self, user_id: int) -> float: ...


class TokensStorage(Protocol):
    """Storage of authorization tokens."""

    def get_by_token(self, token: str) -> int: ...

    def set_token(self, user_id: int, token: str) -> None: ...

    def refresh_token(self, token: str) -> None: ...

    def clear_expired_tokens(self) -> None: ...


class UsersStorage(Protocol):
    """Storage of users."""

    def create_user(self, login: str, password_hash: str) -> None: ...

    def get_user_by_login(self, login: str) -> User: ...


class WithdrawalsStorage(Protocol):
    """Storage of withdrawals."""

    def get_withdrawals_by_user_id(self, user_id: int) -> list[Withdrawal]: ...

    def create_withdrawal(self, user_id: int, order: str, amount: float) -> None: ...

    def get_total_withdrawn_by_user_id(self, user_id: int) -> float: ...


class OrdersRepository:
    """Access to orders."""

    def __init__(self, storage: OrdersStorage) -> None:
        self.storage = storage

    def create_order(self, user_id: int, number: str, status: OrderStatus, accrual: float) -> None:
        self.storage.create_order(user_id, number, status, accrual)

    def get_order_by_number(self, number: str) -> Order:
        return self.storage.get_order_by_number(number)

    def get_orders_by_user_id(self, user_id: int) -> list[Order]:
        return self.storage.get_orders_by_user_id(user_id)

    def get_orders(self, limit: int, offset: int) -> list[Order]:
        """Return a page of orders still waiting to be processed."""
        return self.storage.get_orders_by_limit_and_offset(limit, offset)

    def update_order(self, number: str, status: OrderStatus, accrual: float) -> None:
        self.storage.update_order(number, status, accrual)

    def get_total_accrual(self, user_id: int) -> float:
        return self.storage.get_total_accrual_by_user_id(user_id)


class TokensRepository:
    """Access to authorization tokens."""

    def __init__(self, storage: TokensStorage) -> None:
        self.storage = storage

    def get_authorized_user(self, token: str) -> int:
        return self.storage.get_by_token(token)

    def authorize_user(self, user_id: int, token: str) -> None:
        self.storage.set_token(user_id, token)

    def refresh_token(self, token: str) -> None:
        self.storage.refresh_token(token)

    def clear_expired_tokens(self) -> None:
        self.storage.clear_expired_tokens()


class UsersRepository:
    """Access to users."""

    def __init__(self, storage: UsersStorage) -> None:
        self.storage = storage

    def create_user(self, login: str, password_hash: str) -> None:
        self.storage.create_user(login, password_hash)

    def get_user_by_login(self, login: str) -> User:
        return self.storage.get_user_by_login(login)


class WithdrawalsRepository:
    """Access to withdrawals."""

    def __init__(self, storage: WithdrawalsStorage) -> None:
        self.storage = storage

    def create_withdrawal(self, user_id: int, order: str, amount: float) -> None:
        self.storage.create_withdrawal(user_id, order, amount)

    def get_withdrawals_by_user_id(self, user_id: int) -> list[Withdrawal]:
        return self.storage.get_withdrawals_by_user_id(user_id)

    def get_total_withdrawn(self, user_id: int) -> float:
        return self.storage.get_total_withdrawn_by_user_id(user_id)