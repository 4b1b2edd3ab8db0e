"""Integer arithmetic primitives.

Python integers are arbitrary precision, so these helpers only pin down
rounding direction and the fixed-point conventions used on-chain.
"""

from __future__ import annotations

from math import isqrt

__all__ = [
    "ceil_div",
    "mul_div",
    "mul_shift",
    "most_significant_bit",
    "sqrt",
    "sqrt_ceil",
    "from_d8",
    "to_d8",
]


def ceil_div(x: int, y: int) -> int:
    """Division rounded up. Only non-negative operands are allowed.

    Raises:
        ValueError: If either operand is negative
        ZeroDivisionError: If y is zero
    """
    if x < 0 or y < 0:
        raise ValueError(f"ceil_div requires non-negative operands, got {x} / {y}")
    return -(-x // y)


def mul_div(a: int, b: int, denominator: int, round_up: bool = False) -> int:
    """Compute a * b / denominator for non-negative values, floored or ceiled."""
    product = a * b
    return ceil_div(product, denominator) if round_up else product // denominator


def mul_shift(value: int, multiplier: int, shift: int = 128) -> int:
    """Multiply then shift right, as the tick ladder does with Q128 constants."""
    return (value * multiplier) >> shift


def most_significant_bit(x: int) -> int:
    """Index of the highest set bit.

    Raises:
        ValueError: If x is not positive
    """
    if x <= 0:
        raise ValueError(f"most_significant_bit requires a positive value, got {x}")
    return x.bit_length() - 1


def sqrt(x: int) -> int:
    """Floor of the square root of a non-negative integer."""
    return isqrt(x)


def sqrt_ceil(x: int) -> int:
    """Ceiling of the square root of a non-negative integer."""
    root = isqrt(x)
    return root if root * root == x else root + 1


def from_d8(x: int) -> int:
    """Scaled liquidity to actual liquidity."""
    return x * 256


def to_d8(x: int) -> int:
    """Actual liquidity to scaled liquidity, rounded down."""
    return x // 256
