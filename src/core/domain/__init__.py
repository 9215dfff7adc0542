"""
Доменные модели и value objects.

Состояние начисления пула, его snapshot и события пула.
"""

from src.core.domain.events import (
    AnyPoolEvent,
    Deposit,
    IssuanceParamsUpdated,
    OwnershipAccepted,
    PendingOwnerSet,
    PoolEvent,
    VestingScheduleUpdated,
    Withdraw,
)
from src.core.domain.pool_state import PoolSnapshot, PoolState, VestingCurve

__all__ = [
    # State
    "PoolState",
    "PoolSnapshot",
    "VestingCurve",
    # Events
    "PoolEvent",
    "AnyPoolEvent",
    "Deposit",
    "Withdraw",
    "IssuanceParamsUpdated",
    "VestingScheduleUpdated",
    "PendingOwnerSet",
    "OwnershipAccepted",
]
