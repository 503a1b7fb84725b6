# gophermart

Building blocks for a loyalty points service. In this service users upload order
numbers, earn accruals on them and spend the points on withdrawals. The package
provides the domain models, SQLite-backed storage of users, orders and
withdrawals, an in-memory store of login tokens, configuration parsing, logging,
and Flask/WSGI middleware.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `gophermart.models`

Frozen dataclasses `User`, `Order` and `Withdrawal`, and the `OrderStatus` enum
(`NEW`, `PROCESSING`, `INVALID`, `PROCESSED`). `str(OrderStatus.NEW)` gives
`"NEW"`. The domain errors all derive from `GophermartError`: `NotFoundError`,
`AlreadyExistsError`, `FailedToMatchError`, `InvalidOrderNumError` and
`InsufficientBalanceError`.

### `gophermart.database` and the tables

`DatabaseClient(path)` opens an SQLite database and creates the `users`,
`orders` and `withdrawals` tables if they are missing. It exposes
`users_table`, `orders_table` and `withdrawals_table`. It is a context manager,
and `close()` closes the connection.

```python
from gophermart.database import DatabaseClient
from gophermart.models import OrderStatus

with DatabaseClient(":memory:") as client:
    client.users_table.create_user("alice", "placeholder")
    user = client.users_table.get_user_by_login("alice")
    client.orders_table.create_order(user.id, "79927398713", OrderStatus.NEW, 0)
    client.orders_table.update_order("79927398713", OrderStatus.PROCESSED, 500)
    print(client.orders_table.get_total_accrual_by_user_id(user.id))  # 500.0
```

- `UsersTable`: `create_user(login, password_hash)` and `get_user_by_login(login)`.
- `OrdersTable`: `create_order`, `get_order_by_number`, `get_orders_by_user_id`,
  `get_orders_by_limit_and_offset`, `update_order` and
  `get_total_accrual_by_user_id`. `get_orders_by_limit_and_offset` returns, in
  id order, only orders that are `NEW` or `PROCESSING`. The total accrual counts
  only `PROCESSED` orders.
- `WithdrawalsTable`: `create_withdrawal(user_id, order, amount)`,
  `get_withdrawals_by_user_id` and `get_total_withdrawn_by_user_id`.

A duplicate login, order number or withdrawal order raises `AlreadyExistsError`.
A lookup that finds nothing raises `NotFoundError`.

`gophermart.dbhelpers` holds the underlying `Database` connection wrapper
(thread-safe, autocommit, foreign keys on). It also holds `convert_error`, which
maps database errors to domain errors, and the `time_to_timestamp` and
`timestamp_to_time` helpers.

### `gophermart.memstorage`

`MemStorage` keeps login tokens in memory. `set_token(user_id, token)` replaces
any earlier token of that user. `get_by_token` and `refresh_token` raise
`NotFoundError` for unknown tokens. A token lives 24 hours from its last
refresh, and `clear_expired_tokens()` drops the expired ones.

### `gophermart.repository`

The protocols `OrdersStorage`, `TokensStorage`, `UsersStorage` and
`WithdrawalsStorage` describe the storages. The classes `OrdersRepository`,
`TokensRepository`, `UsersRepository` and `WithdrawalsRepository` wrap them.
For example, `TokensRepository(MemStorage())` or
`OrdersRepository(client.orders_table)`.

### `gophermart.config` and `gophermart.env`

`parse_app_args(argv)` reads the flags `-a <host:port>` (default
`localhost:8080`), `-d <database connection string>` and `-r <accrual base
URL>`. It then applies `override_app_args_with_env` and returns an `AppArgs`.
Environment variables take precedence:

| Variable | Overrides |
|----------|-----------|
| `RUN_ADDRESS` | `-a` |
| `DATABASE_URI` | `-d` |
| `ACCRUAL_SYSTEM_ADDRESS` | `-r` |
| `IS_DEV` | `is_dev` (`true` or `false`) |

An `IS_DEV` value other than `true` or `false` raises `ValueError`, and so does
a malformed `-a` address (`parse_net_address`). `gophermart.env` provides
`get_str_from_env`, `get_int_from_env` and `get_bool_from_env`. Each returns
`None` when the variable is not set.

### `gophermart.logger`

`init(is_dev)` sets up console output in development mode and JSON lines
otherwise. `info`, `warn` and `error` take a message with optional `%`
arguments; keyword arguments become structured fields. `destroy()` flushes the
output.

### `gophermart.webtools` and `gophermart.middlewares`

These are helpers for use inside a Flask request.

- `webtools` provides `get_token_cookie()`, `set_token_cookie(response, token)`,
  `set_user_id(user_id)`, `get_user_id()` and `write_json(status, body)`.
  `get_user_id()` raises `NoUserIDError`, which answers with 401.
- `CompressMiddleware(wsgi_app, prefix="/api")` gunzips request bodies sent with
  `Content-Encoding: gzip`. It gzips successful responses for clients that send
  `Accept-Encoding: gzip` with a JSON or HTML `Accept` or `Content-Type`.
- `make_auth_hook(use_cases)` returns a before-request hook. The hook reads the
  `token` cookie and calls `use_cases.verify_user_authorization(token)`. It
  answers 401 on any failure, and otherwise stores the user id for
  `get_user_id()`.
- `install_request_logging(blueprint)` logs the method, status, path, query and
  duration of each request.
- `install_recovery(app)` turns unhandled exceptions into an empty 500 reply and
  logs them.

## What this package does not do

The package contains no ready service. Specifically, it has:

- no command to start it;
- no assembled HTTP application with the user, order, balance and withdrawal
  endpoints;
- no layer of business rules over the repositories, such as registration,
  login, balance checks or order number validation;
- no password hashing;
- no worker that polls an accrual system for order status.

To build those, wire the storages, repositories and middleware above into your
own Flask application.