import pytest

from pvzservice.appctx import Context
from pvzservice.transactor import (
    IsoLevel,
    TransactionError,
    TransactionManager,
    TxOptions,
)


class FakeTx:
    def __init__(self, commit_error=None, rollback_error=None):
        self.commit_error = commit_error
        self.rollback_error = rollback_error
        self.committed = False
        self.rolled_back = False

    def commit(self, ctx):
        if self.commit_error:
            raise self.commit_error
        self.committed = True

    def rollback(self, ctx):
        self.rolled_back = True
        if self.rollback_error:
            raise self.rollback_error


class FakePool:
    def __init__(self, tx=None, begin_error=None):
        self.tx = tx or FakeTx()
        self.begin_error = begin_error
        self.options = []

    def begin_tx(self, ctx, options):
        if self.begin_error:
            raise self.begin_error
        self.options.append(options)
        return self.tx


def test_get_query_engine_from_context():
    engine = object()
    ctx = Context().with_value("tx", engine)
    tm = TransactionManager(FakePool())
    assert tm.get_query_engine(ctx) is engine


def test_get_query_engine_falls_back_to_pool():
    pool = FakePool()
    assert TransactionManager(pool).get_query_engine(Context()) is pool


def test_unwrap_none():
    assert TransactionManager(FakePool()).unwrap(None) is None


def test_unwrap_not_transaction_error():
    expected = ValueError("err")
    assert TransactionManager(FakePool()).unwrap(expected) is expected


def test_unwrap_transaction_error():
    inner_err = ValueError("inner")
    rollback_err = ValueError("rollback")
    err = TransactionError(inner_err, rollback_err)
    assert TransactionManager(FakePool()).unwrap(err) is inner_err


def test_unwrap_follows_cause():
    inner_err = ValueError("inner")
    wrapper = RuntimeError("wrapped")
    wrapper.__cause__ = TransactionError(inner_err)
    assert TransactionManager(FakePool()).unwrap(wrapper) is inner_err


def test_transaction_error_str():
    err = TransactionError(ValueError("inner"), ValueError("rollback"))
    assert str(err) == "inner=inner rollback=rollback"


def test_run_commits_and_returns_result():
    pool = FakePool()
    tm = TransactionManager(pool)
    assert tm.run_repeatable_read(Context(), lambda ctx: 42) == 42
    assert pool.tx.committed is True
    assert pool.tx.rolled_back is False
    assert pool.options == [TxOptions(IsoLevel.REPEATABLE_READ)]


def test_read_committed_options():
    pool = FakePool()
    TransactionManager(pool).run_read_committed(Context(), lambda ctx: None)
    assert pool.options == [TxOptions(IsoLevel.READ_COMMITTED)]


def test_query_engine_inside_transaction_is_tx():
    pool = FakePool()
    tm = TransactionManager(pool)
    engine = tm.run_repeatable_read(Context(), tm.get_query_engine)
    assert engine is pool.tx


def test_failure_rolls_back():
    pool = FakePool()
    tm = TransactionManager(pool)
    boom = ValueError("boom")

    def fx(ctx):
        raise boom

    with pytest.raises(TransactionError) as info:
        tm.run_repeatable_read(Context(), fx)
    assert info.value.inner is boom
    assert info.value.rollback is None
    assert pool.tx.rolled_back is True
    assert pool.tx.committed is False
    assert tm.unwrap(info.value) is boom


def test_rollback_error_recorded():
    rollback_err = ValueError("rollback")
    pool = FakePool(tx=FakeTx(rollback_error=rollback_err))

    def fx(ctx):
        raise KeyError("inner")

    with pytest.raises(TransactionError) as info:
        TransactionManager(pool).run_repeatable_read(Context(), fx)
    assert info.value.rollback is rollback_err


def test_commit_error_rolls_back():
    commit_err = ValueError("commit")
    pool = FakePool(tx=FakeTx(commit_error=commit_err))
    with pytest.raises(TransactionError) as info:
        TransactionManager(pool).run_read_committed(Context(), lambda ctx: 1)
    assert info.value.inner is commit_err
    assert pool.tx.rolled_back is True


def test_begin_error():
    begin_err = ConnectionError("down")
    pool = FakePool(begin_error=begin_err)
    with pytest.raises(TransactionError) as info:
        TransactionManager(pool).run_repeatable_read(Context(), lambda ctx: 1)
    assert info.value.inner is begin_err
    assert info.value.rollback is None