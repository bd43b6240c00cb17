# pvzservice

Building blocks for a service that runs pickup points (PVZ): the domain
records and errors, request-scoped identity values, bcrypt password
hashing, a transaction manager, the pickup-point use case, and two small
wrappers that run an HTTP (WSGI) or gRPC server in the background.

Everything is storage-agnostic: the use case and the transaction manager
receive their repository and connection pool as plain objects, so they work
against a real database driver or against in-memory fakes.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Modules

### `pvzservice.model`

- `Role` (`EMPLOYEE`, `MODERATOR`) and `ReceptionStatus` (`IN_PROGRESS`,
  `CLOSE`), both string enums.
- Records: `User`, `PVZ` (with a `receptions` list), `Reception` (with a
  `products` list) and `Product`.
- Request parameters, as frozen dataclasses: `LoginUserParam`,
  `RegisterUserParam`, `DummyLoginUserParam`, `CreateProductParam`,
  `CreatePvzParam`, `GetPvzParam` (all fields optional),
  `CreateReceptionParam`, `CloseLastReceptionParam`,
  `DeleteLastReceptionParam`.
- Errors, all subclasses of `DomainError` with a default message:
  `EmployeeOnlyError`, `ModeratorOnlyError`, `InvalidPasswordError`,
  `NoInProgressReceptionError`, `PreviousReceptionNotClosedError`,
  `ReceptionNotFoundError`, `ReceptionAlreadyClosedError`,
  `ProductNotFoundError`.

### `pvzservice.appctx`

`Context` is an immutable chain of key/value pairs: `with_value(key, value)`
returns a child context, and `value(key)` looks the key up through the
chain, returning `None` when it is absent.

`set_user_id`, `set_role` and `set_is_dummy` return a new context holding
the value; `get_user_id`, `get_role` and `get_is_dummy` return it, or
`None` when it is unset or of the wrong type. For a per-request handler
store (any mutable mapping), `echo_set_role` and `echo_get_role` write and
read the role, and `set_echo(ctx, store)` copies whichever of role, user id
and dummy flag the context holds into the store.

```python
from uuid import uuid4
from pvzservice.appctx import Context, get_role, set_role, set_user_id
from pvzservice.model import Role

ctx = set_role(set_user_id(Context(), uuid4()), Role.EMPLOYEE)
assert get_role(ctx) is Role.EMPLOYEE
assert get_role(Context()) is None
```

### `pvzservice.hashing`

`BcryptHash(cost)` hashes with `hash(password)` and checks with
`equal(EqualsParam(hashed=..., value=...))`. A cost below 4 falls back to
10; a cost above 31, or a password longer than 72 bytes, raises
`ValueError`. `equal` returns `False` for a mismatch, an over-long value or
a malformed hash.

```python
from pvzservice.hashing import BcryptHash, EqualsParam

hasher = BcryptHash(5)
hashed = hasher.hash("password")
assert hasher.equal(EqualsParam(hashed=hashed, value="password"))
```

### `pvzservice.transactor`

`TransactionManager(pool)` needs a pool with `begin_tx(ctx, options)`
returning a transaction with `commit(ctx)` and `rollback(ctx)`.

- `run_repeatable_read(ctx, fx)` and `run_read_committed(ctx, fx)` begin a
  transaction with the matching `TxOptions`/`IsoLevel`, call `fx` with a
  context carrying the transaction, commit, and return what `fx` returned.
  A failure in begin, `fx` or commit is raised as `TransactionError`, whose
  `inner` is the original error and whose `rollback` is the rollback
  failure, if any.
- `unwrap(err)` returns the `inner` error of a `TransactionError` found in
  `err` or its chain of causes, and otherwise `err` itself.
- `get_query_engine(ctx)` returns the transaction bound to `ctx`, or the
  pool outside a transaction.

### `pvzservice.usecase.pvz`

`PvzUseCase(pvz_repo)` takes a repository with `create`,
`get_all_pvz_list` and `get_pvz`.

- `create(ctx, CreatePvzParam(...))` raises `ModeratorOnlyError` unless the
  creator is a moderator, and otherwise stores and returns a new `PVZ`.
- `get_all_pvz_list(ctx)` and `get_pvz(ctx, GetPvzParam(...))` pass
  through to the repository.

### `pvzservice.httpserver`

`HttpServer(app, port=..., read_timeout=..., write_timeout=...,
idle_timeout=...)` serves a WSGI application on a background thread. The
address defaults to `":80"`; a port outside 0–65535 raises `ValueError`;
timeouts are in seconds and default to 5. `start()` begins serving,
`notify()` returns a queue that receives the serving error, or `None` once
the server has stopped cleanly, and `shutdown()` stops it.

### `pvzservice.grpcserver`

`GrpcServer(stop, port, handlers=..., interceptors=..., options=...,
max_workers=..., grace=30.0)` serves gRPC until the `threading.Event`
`stop` is set, then stops gracefully. `start()` raises
`AlreadyStartedError` on a second call and `OSError` when the port cannot
be bound. `wait()` blocks until the server has stopped and returns its
error, or `None`.

```python
import threading
from pvzservice.grpcserver import GrpcServer

stop = threading.Event()
server = GrpcServer(stop, 50051)
server.start()
stop.set()
assert server.wait() is None
```

## What the package does not do

- It has no storage: there are no repositories and no database driver.
  Repositories and the connection pool are supplied by the caller.
- Of the use cases, only pickup-point creation and listing are included.
  There is nothing that registers users, logs them in, issues tokens,
  opens or closes receptions, or adds and removes products, although the
  records, parameters and errors for these are defined in
  `pvzservice.model`.
- There are no HTTP routes or gRPC service definitions and no command to
  start a service; `HttpServer` and `GrpcServer` serve whatever application
  or handlers they are given.