"""Pool — share pool с линейным vesting: начисление, операции участников, расписание.

- accrual: чистые функции holdings / exchange rate / preview
- engine: VestingPool, транзакционные deposit / redeem / withdraw / update_vesting_schedule
- коллабораторы: share ledger, asset custody, ownership, clock
"""

from .accrual import (
    apr,
    balance_of_assets,
    exchange_rate,
    preview_deposit,
    preview_redeem,
    preview_withdraw,
    start_vesting,
    total_holdings,
    update_issuance_params,
)
from .clock import Clock, ManualClock, SystemClock
from .config import PoolConfig
from .custody import AssetCustody, InMemoryAssetCustody
from .engine import VestingPool
from .errors import (
    AmountError,
    ArithmeticFault,
    AuthorizationError,
    PoolError,
    TransferFailure,
)
from .ledger import InMemoryShareLedger, ShareLedger
from .ownership import Ownable

__all__ = [
    # Engine
    "VestingPool",
    "PoolConfig",
    # Accrual
    "total_holdings",
    "exchange_rate",
    "preview_deposit",
    "preview_redeem",
    "preview_withdraw",
    "balance_of_assets",
    "update_issuance_params",
    "start_vesting",
    "apr",
    # Collaborators
    "Clock",
    "ManualClock",
    "SystemClock",
    "ShareLedger",
    "InMemoryShareLedger",
    "AssetCustody",
    "InMemoryAssetCustody",
    "Ownable",
    # Errors
    "PoolError",
    "AmountError",
    "AuthorizationError",
    "TransferFailure",
    "ArithmeticFault",
]
