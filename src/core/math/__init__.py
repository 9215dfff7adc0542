"""
Core math modules

Беззнаковые fixed-point примитивы с проверкой.
"""

from src.core.math.fixed_point import (
    UINT256_MAX,
    ArithmeticFault,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    mul_div_down,
    require_uint,
)

__all__ = [
    # Constants
    "UINT256_MAX",
    # Exceptions
    "ArithmeticFault",
    # Validation
    "require_uint",
    # Checked operations
    "checked_add",
    "checked_sub",
    "checked_mul",
    "checked_div",
    "mul_div_down",
]
