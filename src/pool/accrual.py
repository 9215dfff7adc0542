"""
Accrual — Linear-Vesting Holdings & Exchange Rate

Чистые функции над PoolState, supply shares и одним показанием часов.
Здесь ничего не мутирует состояние; engine решает, когда результат коммитится.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Holdings растут линейно во время vesting и замирают на vesting_period_finish
2. Каждое деление усекает, округление всегда в пользу пула
3. При нуле выпущенных shares exchange rate ровно ``precision``
4. ``now`` передается явно: одна операция видит один момент времени

FORMULAS:
    elapsed         = min(now, vesting_period_finish) - last_updated
    total_holdings  = free_assets + issuance_rate * elapsed / precision
    exchange_rate   = total_holdings * precision / total_supply      (precision if supply == 0)
    preview_deposit = assets * precision / exchange_rate
    preview_redeem  = shares * exchange_rate / precision
    apr             = issuance_rate * seconds_per_year * asset_scale / total_supply / precision
"""

from src.core.domain.pool_state import PoolState
from src.core.math.fixed_point import (
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    mul_div_down,
)


# =============================================================================
# HOLDINGS
# =============================================================================


def vesting_time_passed(state: PoolState, now: int) -> int:
    """
    Секунды текущего окна, прошедшие vesting с последнего якоря.

    Ограничено vesting_period_finish; показание часов раньше last_updated
    дает ArithmeticFault (underflow).
    """
    return checked_sub(min(now, state.vesting_period_finish), state.last_updated)


def total_holdings(state: PoolState, now: int) -> int:
    """
    Активы, на которые претендуют все shares в ``now``.

    Args:
        state: Хранимое состояние начисления
        now: Показание часов (UNIX секунды)

    Returns:
        free_assets, когда кривая простаивает, иначе free_assets плюс
        часть окна, прошедшая vesting с last_updated

    Examples:
        >>> s = PoolState(precision=10**6, free_assets=100, issuance_rate=2 * 10**6,
        ...               last_updated=0, vesting_period_finish=10)
        >>> total_holdings(s, 5)
        110
        >>> total_holdings(s, 50)
        120
    """
    if state.issuance_rate == 0:
        return state.free_assets

    vested = mul_div_down(
        state.issuance_rate, vesting_time_passed(state, now), state.precision
    )
    return checked_add(state.free_assets, vested)


# =============================================================================
# EXCHANGE RATE & PREVIEWS
# =============================================================================


def exchange_rate(state: PoolState, total_supply: int, now: int) -> int:
    """
    Holdings на share, масштабировано precision.

    Examples:
        >>> s = PoolState(precision=10**6, free_assets=3_000_000)
        >>> exchange_rate(s, 0, 0)
        1000000
        >>> exchange_rate(s, 2_000_000, 0)
        1500000
    """
    if total_supply == 0:
        return state.precision
    return mul_div_down(total_holdings(state, now), state.precision, total_supply)


def preview_deposit(state: PoolState, total_supply: int, now: int, assets: int) -> int:
    """Shares, выпускаемые за deposit ``assets`` по текущему курсу."""
    return mul_div_down(assets, state.precision, exchange_rate(state, total_supply, now))


def preview_redeem(state: PoolState, total_supply: int, now: int, shares: int) -> int:
    """Активы, возвращаемые за burn ``shares`` по текущему курсу."""
    return mul_div_down(shares, exchange_rate(state, total_supply, now), state.precision)


def preview_withdraw(state: PoolState, total_supply: int, now: int, assets: int) -> int:
    """
    Shares, сжигаемые для извлечения ``assets``.

    Считается в точности как preview_deposit (усечение assets / rate), без
    округления вверх. Оставлено как есть, пока не решено нужное округление.
    """
    return preview_deposit(state, total_supply, now, assets)


def balance_of_assets(state: PoolState, shares: int, total_supply: int, now: int) -> int:
    """Стоимость баланса shares в активах по текущему курсу."""
    return mul_div_down(shares, exchange_rate(state, total_supply, now), state.precision)


# =============================================================================
# STATE TRANSITIONS
# =============================================================================


def update_issuance_params(state: PoolState, now: int) -> PoolState:
    """
    Переякоривание после мутации.

    Обнуляет issuance_rate, когда ``now`` позже vesting_period_finish, и всегда
    переносит last_updated в ``now``. Идемпотентно при фиксированном ``now``.
    """
    rate = 0 if now > state.vesting_period_finish else state.issuance_rate
    return state.evolve(issuance_rate=rate, last_updated=now)


def start_vesting(state: PoolState, custody_balance: int, vesting_period: int, now: int) -> PoolState:
    """
    Новое окно vesting, распределяющее излишек custody на ``vesting_period``.

    Сначала free_assets переякоривается на текущие holdings: начисленное в
    предыдущем окне сохраняется, vesting проходит только оставшийся излишек.

    Raises:
        ArithmeticFault: vesting_period == 0 или custody_balance < holdings
    """
    free_assets = total_holdings(state, now)
    surplus = checked_sub(custody_balance, free_assets)
    rate = checked_div(checked_mul(surplus, state.precision), vesting_period)
    return state.evolve(
        free_assets=free_assets,
        issuance_rate=rate,
        last_updated=now,
        vesting_period_finish=checked_add(now, vesting_period),
    )


# =============================================================================
# ANNUALISED RATE
# =============================================================================


def apr(
    state: PoolState,
    total_supply: int,
    seconds_per_year: int,
    asset_scale: int,
) -> int:
    """
    Годовая эмиссия относительно выпущенных shares, масштабировано asset_scale.

    Ноль выпущенных shares дает ошибку деления.

    Examples:
        >>> s = PoolState(precision=10**6, issuance_rate=10**6, vesting_period_finish=1)
        >>> apr(s, 31_536_000, 31_536_000, 10**6)
        1000000
    """
    numerator = checked_mul(
        checked_mul(state.issuance_rate, seconds_per_year), asset_scale
    )
    return checked_div(checked_div(numerator, total_supply), state.precision)
