"""VestingPool — share pool, holdings которого проходят линейный vesting по расписанию.

Участники вносят актив за shares и выводят активы через redeem/withdraw по
единому exchange rate, выведенному из кривой vesting. Owner перезапускает
кривую через ``update_vesting_schedule``, распределяя еще не учтенный
излишек custody на новый период.

Каждая операция:
1. читает часы один раз
2. считает цену по состоянию до мутации
3. мутирует share ledger
4. переякоривает free_assets и issuance params
5. двигает активы через custody (последним шагом)

и транзакционна: новый PoolState и staged события коммитятся только если
все шаги прошли. Mint/burn в ledger и смена owner откатываются при ошибке.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple

from src.core.domain.events import (
    AnyPoolEvent,
    Deposit,
    IssuanceParamsUpdated,
    OwnershipAccepted,
    PendingOwnerSet,
    VestingScheduleUpdated,
    Withdraw,
)
from src.core.domain.pool_state import PoolSnapshot, PoolState, VestingCurve
from src.core.math.fixed_point import checked_add, checked_sub, require_uint
from src.pool import accrual
from src.pool.clock import Clock, SystemClock
from src.pool.config import PoolConfig
from src.pool.custody import AssetCustody, InMemoryAssetCustody
from src.pool.errors import AmountError, PoolError, TransferFailure
from src.pool.ledger import InMemoryShareLedger, ShareLedger
from src.pool.ownership import Ownable

logger = logging.getLogger(__name__)


class _Transaction:
    """Staged изменения одной операции пула плюс undo log."""

    def __init__(self, state: PoolState, ledger: ShareLedger) -> None:
        self.state = state
        self.events: List[AnyPoolEvent] = []
        self._ledger = ledger
        self._undo: List[Callable[[], None]] = []

    def mint(self, to: str, amount: int) -> None:
        self._ledger.mint(to, amount)
        self._undo.append(lambda: self._ledger.burn(to, amount))

    def burn(self, from_: str, amount: int) -> None:
        self._ledger.burn(from_, amount)
        self._undo.append(lambda: self._ledger.mint(from_, amount))

    def on_rollback(self, undo: Callable[[], None]) -> None:
        self._undo.append(undo)

    def emit(self, event: AnyPoolEvent) -> None:
        self.events.append(event)

    def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()


class VestingPool:
    """Share pool с линейным vesting.

    Usage:
        clock = ManualClock(start=1_700_000_000)
        pool = VestingPool(owner="treasury", clock=clock)
        pool.custody.credit("alice", 1_000_000)
        shares = pool.deposit(1_000_000, caller="alice")

        pool.custody.credit("treasury", 500_000)
        pool.custody.transfer_in("treasury", 500_000)   # доход, еще не прошел vesting
        pool.update_vesting_schedule(100, caller="treasury")
        clock.advance(50)
        pool.total_holdings()                          # 1_250_000
    """

    def __init__(
        self,
        owner: str,
        config: Optional[PoolConfig] = None,
        ledger: Optional[ShareLedger] = None,
        custody: Optional[AssetCustody] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or PoolConfig()
        self.ledger = ledger if ledger is not None else InMemoryShareLedger()
        self.custody = (
            custody if custody is not None else InMemoryAssetCustody(self.config.pool_account)
        )
        self.clock = clock if clock is not None else SystemClock()
        self.access = Ownable(owner)

        self._state = PoolState(precision=self.config.precision)
        self._events: List[AnyPoolEvent] = []
        self._in_operation = False

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def precision(self) -> int:
        return self._state.precision

    @property
    def owner(self) -> str:
        return self.access.owner

    @property
    def pending_owner(self) -> Optional[str]:
        return self.access.pending_owner

    @property
    def events(self) -> Tuple[AnyPoolEvent, ...]:
        return tuple(self._events)

    # ------------------------------------------------------------------
    # Queries (одно чтение часов на запрос)
    # ------------------------------------------------------------------

    def total_holdings(self) -> int:
        return accrual.total_holdings(self._state, self.clock.now())

    def exchange_rate(self) -> int:
        return accrual.exchange_rate(
            self._state, self.ledger.total_supply(), self.clock.now()
        )

    def preview_deposit(self, assets: int) -> int:
        return accrual.preview_deposit(
            self._state, self.ledger.total_supply(), self.clock.now(), assets
        )

    def preview_redeem(self, shares: int) -> int:
        return accrual.preview_redeem(
            self._state, self.ledger.total_supply(), self.clock.now(), shares
        )

    def preview_withdraw(self, assets: int) -> int:
        return accrual.preview_withdraw(
            self._state, self.ledger.total_supply(), self.clock.now(), assets
        )

    def balance_of(self, account: str) -> int:
        """Баланс shares ``account``."""
        return self.ledger.balance_of(account)

    def balance_of_assets(self, account: str) -> int:
        """Стоимость shares ``account`` в активах по текущему курсу."""
        return accrual.balance_of_assets(
            self._state,
            self.ledger.balance_of(account),
            self.ledger.total_supply(),
            self.clock.now(),
        )

    def apr(self) -> int:
        """Годовая эмиссия на share, масштабировано config.asset_scale."""
        return accrual.apr(
            self._state,
            self.ledger.total_supply(),
            self.config.seconds_per_year,
            self.config.asset_scale,
        )

    def custody_balance(self) -> int:
        return self.custody.balance_of(self.config.pool_account)

    def curve(self) -> VestingCurve:
        return self._state.curve_at(self.clock.now())

    def snapshot(self) -> PoolSnapshot:
        """Все публичные запросы по одному показанию часов."""
        now = self.clock.now()
        supply = self.ledger.total_supply()
        holdings = accrual.total_holdings(self._state, now)
        custody = self.custody_balance()
        return PoolSnapshot(
            ts=now,
            state=self._state,
            curve=self._state.curve_at(now),
            total_supply=supply,
            custody_balance=custody,
            total_holdings=holdings,
            exchange_rate=accrual.exchange_rate(self._state, supply, now),
            unvested_assets=custody - holdings if custody > holdings else 0,
        )

    # ------------------------------------------------------------------
    # Participant operations
    # ------------------------------------------------------------------

    def deposit(self, assets: int, caller: str, receiver: Optional[str] = None) -> int:
        """Deposit ``assets`` от ``caller``; shares выпускаются ``receiver``.

        Returns:
            Выпущенные shares

        Raises:
            AmountError: assets == 0
            TransferFailure: custody отказал во входящем переводе
            ArithmeticFault: overflow или нулевой exchange rate
        """
        receiver = receiver or caller
        self._require_amount(assets)
        now = self.clock.now()

        with self._transaction("deposit", caller) as tx:
            shares = accrual.preview_deposit(
                tx.state, self.ledger.total_supply(), now, assets
            )
            tx.mint(receiver, shares)
            tx.state = tx.state.evolve(
                free_assets=checked_add(accrual.total_holdings(tx.state, now), assets)
            )
            self._update_issuance_params(tx, now)
            event = Deposit(
                ts=now, caller=caller, receiver=receiver, assets=assets, shares=shares
            )
            if not self.custody.transfer_in(caller, assets):
                raise TransferFailure("in", caller, assets)
            tx.emit(event)

        logger.info("deposit %s: assets=%d shares=%d receiver=%s", caller, assets, shares, receiver)
        return shares

    def redeem(self, shares: int, caller: str, receiver: Optional[str] = None) -> int:
        """Burn ``shares`` у ``caller`` и отправка активов ``receiver``.

        Returns:
            Отправленные активы

        Raises:
            AmountError: shares == 0
            ArithmeticFault: shares больше баланса caller, активы больше holdings
            TransferFailure: custody отказал в исходящем переводе
        """
        receiver = receiver or caller
        self._require_amount(shares)
        now = self.clock.now()

        with self._transaction("redeem", caller) as tx:
            assets = accrual.preview_redeem(tx.state, self.ledger.total_supply(), now, shares)
            tx.burn(caller, shares)
            event = Withdraw(
                ts=now, caller=caller, receiver=receiver, assets=assets, shares=shares
            )
            self._release(tx, now, assets, receiver)
            tx.emit(event)

        logger.info("redeem %s: shares=%d assets=%d receiver=%s", caller, shares, assets, receiver)
        return assets

    def withdraw(self, assets: int, caller: str, receiver: Optional[str] = None) -> int:
        """Burn shares на сумму ``assets`` у ``caller`` и отправка активов.

        Returns:
            Сожженные shares

        Raises:
            AmountError: assets == 0
            ArithmeticFault: shares больше баланса caller, активы больше holdings
            TransferFailure: custody отказал в исходящем переводе
        """
        receiver = receiver or caller
        self._require_amount(assets)
        now = self.clock.now()

        with self._transaction("withdraw", caller) as tx:
            shares = accrual.preview_withdraw(
                tx.state, self.ledger.total_supply(), now, assets
            )
            tx.burn(caller, shares)
            event = Withdraw(
                ts=now, caller=caller, receiver=receiver, assets=assets, shares=shares
            )
            self._release(tx, now, assets, receiver)
            tx.emit(event)

        logger.info("withdraw %s: assets=%d shares=%d receiver=%s", caller, assets, shares, receiver)
        return shares

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def update_vesting_schedule(self, vesting_period: int, caller: str) -> Tuple[int, int]:
        """Запуск нового окна vesting длиной ``vesting_period`` секунд.

        Returns:
            (issuance_rate, free_assets) нового окна

        Raises:
            AuthorizationError: caller не owner
            ArithmeticFault: vesting_period == 0 или custody меньше holdings
        """
        self.access.require_owner(caller)
        require_uint(vesting_period)
        now = self.clock.now()

        with self._transaction("update_vesting_schedule", caller) as tx:
            tx.state = accrual.start_vesting(
                tx.state, self.custody_balance(), vesting_period, now
            )
            tx.emit(
                VestingScheduleUpdated(
                    ts=now,
                    owner=caller,
                    vesting_period_finish=tx.state.vesting_period_finish,
                    issuance_rate=tx.state.issuance_rate,
                    free_assets=tx.state.free_assets,
                )
            )

        logger.info(
            "vesting schedule updated by %s: rate=%d free_assets=%d finish=%d",
            caller,
            self._state.issuance_rate,
            self._state.free_assets,
            self._state.vesting_period_finish,
        )
        return self._state.issuance_rate, self._state.free_assets

    def set_pending_owner(self, pending_owner: Optional[str], caller: str) -> None:
        now = self.clock.now()
        with self._transaction("set_pending_owner", caller) as tx:
            self._stage_ownership(tx)
            self.access.set_pending_owner(caller, pending_owner)
            tx.emit(PendingOwnerSet(ts=now, owner=caller, pending_owner=pending_owner))

    def accept_ownership(self, caller: str) -> None:
        now = self.clock.now()
        with self._transaction("accept_ownership", caller) as tx:
            self._stage_ownership(tx)
            previous = self.access.accept_ownership(caller)
            tx.emit(OwnershipAccepted(ts=now, previous_owner=previous, new_owner=caller))
        logger.info("ownership transferred %s -> %s", previous, caller)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self, operation: str, caller: str) -> Iterator[_Transaction]:
        if self._in_operation:
            raise PoolError(f"reentrant call to {operation} by {caller!r}")
        self._in_operation = True
        tx = _Transaction(self._state, self.ledger)
        try:
            yield tx
        except Exception as exc:
            tx.rollback()
            logger.warning("%s by %s rolled back: %s", operation, caller, exc)
            raise
        else:
            self._state = tx.state
            self._events.extend(tx.events)
        finally:
            self._in_operation = False

    def _stage_ownership(self, tx: _Transaction) -> None:
        owner, pending_owner = self.access.owner, self.access.pending_owner
        tx.on_rollback(lambda: self.access.restore(owner, pending_owner))

    def _update_issuance_params(self, tx: _Transaction, now: int) -> None:
        tx.state = accrual.update_issuance_params(tx.state, now)
        logger.debug(
            "issuance params: free_assets=%d rate=%d last_updated=%d",
            tx.state.free_assets,
            tx.state.issuance_rate,
            now,
        )
        tx.emit(
            IssuanceParamsUpdated(
                ts=now,
                last_updated=now,
                free_assets=tx.state.free_assets,
                issuance_rate=tx.state.issuance_rate,
            )
        )

    def _release(self, tx: _Transaction, now: int, assets: int, receiver: str) -> None:
        tx.state = tx.state.evolve(
            free_assets=checked_sub(accrual.total_holdings(tx.state, now), assets)
        )
        self._update_issuance_params(tx, now)
        if not self.custody.transfer_out(receiver, assets):
            raise TransferFailure("out", receiver, assets)

    @staticmethod
    def _require_amount(amount: int) -> None:
        require_uint(amount)
        if amount == 0:
            raise AmountError("amount must be nonzero")
