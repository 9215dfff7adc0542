"""
Fixed-Point Arithmetic — Checked Unsigned Integer Primitives

Весь учет shares/активов ведется на беззнаковых целых в диапазоне
[0, UINT256_MAX]. Дробные величины (exchange rate, issuance rate)
представлены целыми, масштабированными на ``precision`` пула.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не попадает в путь учета
2. Overflow, underflow и деление на ноль поднимают ArithmeticFault (никакого clamp)
3. Каждое деление усекает к нулю (floor для беззнаковых операндов)
4. Все операции детерминированы и воспроизводимы

FORMULAS:
    mul_div_down(x, y, d) = floor(x * y / d)
"""

from typing import Final


# =============================================================================
# DOMAIN BOUNDS
# =============================================================================

# Верхняя граница беззнакового домена (256-битное слово)
UINT256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ArithmeticFault(ArithmeticError):
    """
    Фатальная ошибка fixed-point математики: overflow, underflow, деление на ноль
    или операнд вне [0, UINT256_MAX].

    Поднимается вместо тихого clamp; объемлющая операция пула откатывается.
    """

    pass


# =============================================================================
# DOMAIN VALIDATION
# =============================================================================


def require_uint(*values: int) -> None:
    """
    Проверка, что каждое значение — int в [0, UINT256_MAX].

    Raises:
        ArithmeticFault: для bool, не-int, отрицательных и значений выше UINT256_MAX
    """
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ArithmeticFault(f"operand must be an unsigned int, got {value!r}")
        if value < 0 or value > UINT256_MAX:
            raise ArithmeticFault(f"operand {value} outside [0, UINT256_MAX]")


# =============================================================================
# CHECKED OPERATIONS
# =============================================================================


def checked_add(x: int, y: int) -> int:
    """
    Сложение с проверкой.

    Examples:
        >>> checked_add(1, 2)
        3
    """
    require_uint(x, y)
    result = x + y
    if result > UINT256_MAX:
        raise ArithmeticFault(f"overflow: {x} + {y}")
    return result


def checked_sub(x: int, y: int) -> int:
    """
    Вычитание с проверкой; y > x — underflow.

    Examples:
        >>> checked_sub(5, 3)
        2
    """
    require_uint(x, y)
    if y > x:
        raise ArithmeticFault(f"underflow: {x} - {y}")
    return x - y


def checked_mul(x: int, y: int) -> int:
    """Умножение с проверкой."""
    require_uint(x, y)
    result = x * y
    if result > UINT256_MAX:
        raise ArithmeticFault(f"overflow: {x} * {y}")
    return result


def checked_div(x: int, y: int) -> int:
    """
    Floor division с проверкой.

    Examples:
        >>> checked_div(7, 2)
        3
    """
    require_uint(x, y)
    if y == 0:
        raise ArithmeticFault(f"division by zero: {x} / 0")
    return x // y


def mul_div_down(x: int, y: int, d: int) -> int:
    """
    floor(x * y / d) с проверкой промежуточного произведения по домену.

    Результат совпадает с машиной фиксированной ширины, которая переполнилась
    бы на x * y до деления.

    Args:
        x: Первый множитель
        y: Второй множитель
        d: Делитель (должен быть > 0)

    Returns:
        Усеченное частное

    Raises:
        ArithmeticFault: при overflow x * y или d == 0

    Examples:
        >>> mul_div_down(1_000_000, 1_000_000, 3)
        333333333333
        >>> mul_div_down(5, 0, 7)
        0
    """
    return checked_div(checked_mul(x, y), d)
