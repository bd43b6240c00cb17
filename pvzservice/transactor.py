"""Runs work inside database transactions and hands out query engines."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, TypeVar

TX_KEY = "tx"

T = TypeVar("T")


class TransactionError(Exception):
    """A failure inside a transaction, with the rollback failure if any."""

    def __init__(self, inner: BaseException, rollback: BaseException | None = None) -> None:
        super().__init__(inner, rollback)
        self.inner = inner
        self.rollback = rollback

    def __str__(self) -> str:
        return f"inner={self.inner} rollback={self.rollback}"


class IsoLevel(str, Enum):
    READ_COMMITTED = "read committed"
    REPEATABLE_READ = "repeatable read"


@dataclass(frozen=True)
class TxOptions:
    iso_level: IsoLevel
    read_only: bool = False


class _Tx(Protocol):
    def commit(self, ctx: Any) -> None: ...

    def rollback(self, ctx: Any) -> None: ...


class _Pool(Protocol):
    def begin_tx(self, ctx: Any, options: TxOptions) -> _Tx: ...


class TransactionManager:
    """Begins, commits and rolls back transactions on a pool."""

    def __init__(self, pool: _Pool) -> None:
        self._pool = pool

    def run_repeatable_read(self, ctx: Any, fx: Callable[[Any], T]) -> T:
        return self._run(ctx, fx, TxOptions(IsoLevel.REPEATABLE_READ))

    def run_read_committed(self, ctx: Any, fx: Callable[[Any], T]) -> T:
        return self._run(ctx, fx, TxOptions(IsoLevel.READ_COMMITTED))

    def _run(self, ctx: Any, fx: Callable[[Any], T], options: TxOptions) -> T:
        try:
            tx = self._pool.begin_tx(ctx, options)
        except Exception as err:
            raise TransactionError(err) from err

        try:
            result = fx(ctx.with_value(TX_KEY, tx))
        except Exception as err:
            raise TransactionError(err, self._rollback(tx, ctx)) from err

        try:
            tx.commit(ctx)
        except Exception as err:
            raise TransactionError(err, self._rollback(tx, ctx)) from err
        return result

    @staticmethod
    def _rollback(tx: _Tx, ctx: Any) -> BaseException | None:
        try:
            tx.rollback(ctx)
        except Exception as err:
            return err
        return None

    def unwrap(self, err: BaseException | None) -> BaseException | None:
        """Return the inner error of a transaction failure, else err itself."""
        node = err
        seen: set[int] = set()
        while node is not None and id(node) not in seen:
            if isinstance(node, TransactionError):
                return node.inner
            seen.add(id(node))
            node = node.__cause__
        return err

    def get_query_engine(self, ctx: Any) -> Any:
        """Return the transaction bound to ctx, or the pool outside one."""
        tx = ctx.value(TX_KEY)
        if tx is not None:
            return tx
        return self._pool