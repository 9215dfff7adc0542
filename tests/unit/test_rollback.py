"""Тесты атомарности операций (все или ничего).

Отказ перевода в custody (или любой более поздний сбой) оставляет share
ledger, состояние начисления, custody и журнал событий ровно как были.
"""

import logging

import pytest

from src.pool import (
    ManualClock,
    PoolConfig,
    PoolError,
    TransferFailure,
    VestingPool,
)
from tests.conftest import OWNER


def _capture(pool):
    return (
        pool.state,
        pool.events,
        pool.ledger.holders(),
        pool.ledger.total_supply(),
        pool.custody_balance(),
    )


class TestTransferFailureRollback:
    """Тесты отката после отказа в переводе."""

    def test_deposit_insufficient_funds(self, pool):
        pool.custody.credit("dave", 100)
        before = _capture(pool)

        with pytest.raises(TransferFailure) as excinfo:
            pool.deposit(101, caller="dave")

        assert excinfo.value.direction == "in"
        assert excinfo.value.account == "dave"
        assert excinfo.value.amount == 101
        assert _capture(pool) == before
        assert pool.balance_of("dave") == 0

    def test_deposit_injected_failure_after_vesting(self, pool, clock, add_revenue):
        pool.deposit(1_000_000, caller="alice")
        add_revenue(500_000)
        pool.update_vesting_schedule(100, caller=OWNER)
        clock.advance(150)
        before = _capture(pool)

        pool.custody.fail_next_transfer()
        with pytest.raises(TransferFailure):
            pool.deposit(1_000, caller="bob")

        # rate не обнулен, якорь не сдвинулся
        assert _capture(pool) == before
        assert pool.state.issuance_rate > 0

        # следующая попытка проходит штатно
        pool.deposit(1_000, caller="bob")
        assert pool.state.issuance_rate == 0

    def test_redeem_failure_restores_shares(self, pool):
        pool.deposit(5_000, caller="alice")
        before = _capture(pool)

        pool.custody.fail_next_transfer()
        with pytest.raises(TransferFailure) as excinfo:
            pool.redeem(2_000, caller="alice", receiver="carol")

        assert excinfo.value.direction == "out"
        assert excinfo.value.account == "carol"
        assert _capture(pool) == before
        assert pool.balance_of("alice") == 5_000

    def test_withdraw_failure_restores_shares(self, pool):
        pool.deposit(5_000, caller="alice")
        before = _capture(pool)

        pool.custody.fail_next_transfer()
        with pytest.raises(TransferFailure):
            pool.withdraw(2_000, caller="alice")

        assert _capture(pool) == before

    def test_rollback_is_logged(self, pool, caplog):
        pool.custody.fail_next_transfer()
        with caplog.at_level(logging.WARNING, logger="src.pool.engine"):
            with pytest.raises(TransferFailure):
                pool.deposit(10, caller="alice")
        assert "deposit by alice rolled back" in caplog.text

    def test_transfer_failure_is_pool_error(self):
        assert issubclass(TransferFailure, PoolError)


class TestOwnershipRollback:
    """Тесты отката передачи owner."""

    @staticmethod
    def _reject(**kwargs):
        raise ValueError("event rejected")

    def test_empty_pending_owner_rejected(self, pool):
        before = pool.events
        with pytest.raises(ValueError):
            pool.set_pending_owner("", caller=OWNER)
        assert pool.pending_owner is None
        assert pool.events == before

    def test_failed_accept_keeps_owner(self, pool, monkeypatch):
        pool.set_pending_owner("bob", caller=OWNER)
        before = pool.events
        monkeypatch.setattr("src.pool.engine.OwnershipAccepted", self._reject)

        with pytest.raises(ValueError):
            pool.accept_ownership(caller="bob")

        assert pool.owner == OWNER
        assert pool.pending_owner == "bob"
        assert pool.events == before

    def test_failed_nomination_keeps_pending_owner(self, pool, monkeypatch):
        pool.set_pending_owner("bob", caller=OWNER)
        monkeypatch.setattr("src.pool.engine.PendingOwnerSet", self._reject)

        with pytest.raises(ValueError):
            pool.set_pending_owner("carol", caller=OWNER)

        assert pool.pending_owner == "bob"
        assert pool.owner == OWNER

    def test_accept_after_failed_attempt(self, pool, monkeypatch):
        pool.set_pending_owner("bob", caller=OWNER)
        with monkeypatch.context() as patch:
            patch.setattr("src.pool.engine.OwnershipAccepted", self._reject)
            with pytest.raises(ValueError):
                pool.accept_ownership(caller="bob")

        pool.accept_ownership(caller="bob")
        assert pool.owner == "bob"
        assert pool.pending_owner is None


class _ReentrantCustody:
    """Custody, вызывающий пул обратно во время перевода."""

    def __init__(self):
        self.pool = None
        self.inner_error = None
        self._balances = {"pool": 0}

    def balance_of(self, account):
        return self._balances.get(account, 0)

    def transfer_in(self, from_, amount):
        try:
            self.pool.deposit(1, caller=from_)
        except PoolError as exc:
            self.inner_error = exc
        self._balances["pool"] += amount
        return True

    def transfer_out(self, to, amount):
        self._balances["pool"] -= amount
        return True


class TestReentrancy:
    """Тесты вложенных вызовов из коллабораторов."""

    def test_reentrant_call_rejected(self):
        custody = _ReentrantCustody()
        pool = VestingPool(
            owner=OWNER, config=PoolConfig(), custody=custody, clock=ManualClock(start=1)
        )
        custody.pool = pool

        shares = pool.deposit(100, caller="alice")

        assert shares == 100
        assert isinstance(custody.inner_error, PoolError)
        assert "reentrant" in str(custody.inner_error)
        assert pool.ledger.total_supply() == 100
