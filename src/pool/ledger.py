"""Share ledger — балансы и total supply shares пула.

Пулу нужны только mint/burn/balance_of/total_supply; ``transfer`` оставлен,
чтобы shares оставались обычным fungible токеном для держателей.
"""

from typing import Dict, Protocol

from src.core.math.fixed_point import checked_add, checked_sub, require_uint


class ShareLedger(Protocol):
    def mint(self, to: str, amount: int) -> None:
        ...

    def burn(self, from_: str, amount: int) -> None:
        ...

    def balance_of(self, account: str) -> int:
        ...

    def total_supply(self) -> int:
        ...


class InMemoryShareLedger:
    """Fungible share ledger в памяти.

    Burn или transfer больше баланса счета дает ArithmeticFault (underflow),
    как и переполнение supply при mint.
    """

    def __init__(self) -> None:
        self._balances: Dict[str, int] = {}
        self._total_supply = 0

    def mint(self, to: str, amount: int) -> None:
        require_uint(amount)
        new_supply = checked_add(self._total_supply, amount)
        self._balances[to] = checked_add(self._balances.get(to, 0), amount)
        self._total_supply = new_supply

    def burn(self, from_: str, amount: int) -> None:
        require_uint(amount)
        new_balance = checked_sub(self._balances.get(from_, 0), amount)
        self._total_supply = checked_sub(self._total_supply, amount)
        self._set_balance(from_, new_balance)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        require_uint(amount)
        new_sender = checked_sub(self._balances.get(sender, 0), amount)
        self._set_balance(sender, new_sender)
        self._balances[recipient] = checked_add(self._balances.get(recipient, 0), amount)

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def holders(self) -> Dict[str, int]:
        """Копия всех ненулевых балансов."""
        return dict(self._balances)

    def _set_balance(self, account: str, balance: int) -> None:
        if balance == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = balance
