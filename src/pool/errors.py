"""Таксономия ошибок пула.

Каждая ошибка поднимается синхронно из упавшей операции, после того как
частичные изменения операции откачены. ``ArithmeticFault`` живет рядом с
fixed-point математикой и реэкспортируется здесь.
"""

from src.core.math.fixed_point import ArithmeticFault


class PoolError(Exception):
    """Базовый класс ошибок операций пула."""

    pass


class AmountError(PoolError):
    """В deposit/redeem/withdraw передана нулевая сумма."""

    pass


class AuthorizationError(PoolError):
    """Caller не является owner (или pending owner) для административного действия."""

    pass


class TransferFailure(PoolError):
    """Custody отказал в переводе активов; операция откачена."""

    def __init__(self, direction: str, account: str, amount: int):
        self.direction = direction
        self.account = account
        self.amount = amount
        super().__init__(f"transfer {direction} of {amount} for {account!r} failed")


__all__ = [
    "PoolError",
    "AmountError",
    "AuthorizationError",
    "TransferFailure",
    "ArithmeticFault",
]
