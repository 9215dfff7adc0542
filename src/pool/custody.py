"""Asset custody — перемещение единиц актива между участниками и пулом.

Переводы сообщают успех через bool; пул превращает ``False`` в
TransferFailure и откатывает объемлющую операцию.
"""

import logging
from typing import Dict, Protocol

from src.core.math.fixed_point import checked_add, checked_sub, require_uint

logger = logging.getLogger(__name__)


class AssetCustody(Protocol):
    def transfer_in(self, from_: str, amount: int) -> bool:
        ...

    def transfer_out(self, to: str, amount: int) -> bool:
        ...

    def balance_of(self, account: str) -> int:
        ...


class InMemoryAssetCustody:
    """Балансы активов участников и счета пула в памяти.

    Usage:
        custody = InMemoryAssetCustody(pool_account="pool")
        custody.credit("alice", 1_000_000)
        custody.transfer_in("alice", 400_000)   # alice -> pool
        custody.transfer_out("alice", 100_000)  # pool -> alice
    """

    def __init__(self, pool_account: str = "pool") -> None:
        self.pool_account = pool_account
        self._balances: Dict[str, int] = {}
        self._fail_next = 0

    def credit(self, account: str, amount: int) -> None:
        """Создание единиц актива на счете (пополнение извне пула)."""
        require_uint(amount)
        self._balances[account] = checked_add(self._balances.get(account, 0), amount)

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def fail_next_transfer(self, count: int = 1) -> None:
        """Следующие ``count`` переводов вернут отказ, не двигая средства."""
        self._fail_next += count

    def transfer_in(self, from_: str, amount: int) -> bool:
        """Перевод ``amount`` с ``from_`` на счет пула."""
        return self._move(from_, self.pool_account, amount)

    def transfer_out(self, to: str, amount: int) -> bool:
        """Перевод ``amount`` со счета пула на ``to``."""
        return self._move(self.pool_account, to, amount)

    def _move(self, sender: str, recipient: str, amount: int) -> bool:
        require_uint(amount)
        if self._fail_next > 0:
            self._fail_next -= 1
            logger.debug("injected transfer failure %s -> %s (%d)", sender, recipient, amount)
            return False
        available = self._balances.get(sender, 0)
        if available < amount:
            logger.debug(
                "insufficient balance %s: %d < %d", sender, available, amount
            )
            return False
        self._balances[sender] = checked_sub(available, amount)
        self._balances[recipient] = checked_add(self._balances.get(recipient, 0), amount)
        return True
