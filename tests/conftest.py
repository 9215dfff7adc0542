"""Общие fixtures: пул на ручных часах с in-memory коллабораторами."""

import pytest

from src.pool import ManualClock, PoolConfig, VestingPool

T0 = 1_700_000_000
PRECISION = 10**6
OWNER = "treasury"


@pytest.fixture
def clock():
    return ManualClock(start=T0)


@pytest.fixture
def pool(clock):
    pool = VestingPool(owner=OWNER, config=PoolConfig(precision=PRECISION), clock=clock)
    for account in ("alice", "bob", "carol"):
        pool.custody.credit(account, 10**12)
    return pool


@pytest.fixture
def add_revenue(pool):
    """Отправка дохода без vesting прямо в custody (в обход пула)."""

    def _add(amount: int) -> None:
        pool.custody.credit(OWNER, amount)
        assert pool.custody.transfer_in(OWNER, amount)

    return _add
