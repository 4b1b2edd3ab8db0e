"""Conversion between liquidity and token amounts.

Amounts are reserve deltas seen from the pool: positive values flow into
the pool and are rounded up, negative values flow out and are rounded
toward zero. Liquidity arguments ending in ``_d8`` are scaled liquidity
(actual liquidity / 256).
"""

from __future__ import annotations

from typing import NamedTuple

from muffin.constants import Q72
from muffin.errors import InvalidLiquidity, InvalidSqrtPrice
from muffin.math.full_math import ceil_div, from_d8, mul_div, to_d8

__all__ = [
    "TokenAmounts",
    "get_amount0_delta",
    "get_amount1_delta",
    "calc_amount0_delta",
    "calc_amount1_delta",
    "amounts_for_liquidity_delta_d8",
    "min_input_amounts_for_liquidity_d8",
    "min_output_amounts_for_liquidity_d8",
    "max_output_liquidity_d8_for_amounts",
]


class TokenAmounts(NamedTuple):
    """A pair of token0/token1 amounts."""

    amount0: int
    amount1: int


def get_amount0_delta(sqrt_pa: int, sqrt_pb: int, liquidity: int, round_up: bool) -> int:
    """Unsigned change of token0 reserve between two sqrt prices."""
    if sqrt_pa > sqrt_pb:
        sqrt_pa, sqrt_pb = sqrt_pb, sqrt_pa
    numerator = liquidity * (sqrt_pb - sqrt_pa) * Q72
    denominator = sqrt_pa * sqrt_pb
    return ceil_div(numerator, denominator) if round_up else numerator // denominator


def get_amount1_delta(sqrt_pa: int, sqrt_pb: int, liquidity: int, round_up: bool) -> int:
    """Unsigned change of token1 reserve between two sqrt prices."""
    if sqrt_pa > sqrt_pb:
        sqrt_pa, sqrt_pb = sqrt_pb, sqrt_pa
    return mul_div(liquidity, sqrt_pb - sqrt_pa, Q72, round_up)


def calc_amount0_delta(sqrt_p0: int, sqrt_p1: int, liquidity: int) -> int:
    """Signed change of token0 reserve when price moves from sqrt_p0 to sqrt_p1.

    Δx = L (√P0 - √P1) / (√P0 √P1). Price going up releases token0 (negative,
    rounded toward zero); price going down takes token0 in (positive, rounded up).
    """
    if sqrt_p0 < sqrt_p1:
        return -get_amount0_delta(sqrt_p0, sqrt_p1, liquidity, round_up=False)
    return get_amount0_delta(sqrt_p0, sqrt_p1, liquidity, round_up=True)


def calc_amount1_delta(sqrt_p0: int, sqrt_p1: int, liquidity: int) -> int:
    """Signed change of token1 reserve when price moves from sqrt_p0 to sqrt_p1.

    Δy = L (√P1 - √P0). Price going up takes token1 in (positive, rounded up);
    price going down releases token1 (negative, rounded toward zero).
    """
    if sqrt_p0 < sqrt_p1:
        return get_amount1_delta(sqrt_p0, sqrt_p1, liquidity, round_up=True)
    return -get_amount1_delta(sqrt_p0, sqrt_p1, liquidity, round_up=False)


def _check_bounds(sqrt_p_lower: int, sqrt_p_upper: int) -> None:
    if sqrt_p_lower >= sqrt_p_upper:
        raise InvalidSqrtPrice(f"Lower sqrt price {sqrt_p_lower} must be below upper {sqrt_p_upper}")


def amounts_for_liquidity_delta_d8(
    sqrt_p: int,
    sqrt_p_lower: int,
    sqrt_p_upper: int,
    liquidity_delta_d8: int,
) -> TokenAmounts:
    """Token amounts for adding (positive) or removing (negative) scaled liquidity.

    The current price is clamped into the range first. Adding liquidity rounds
    the required deposit up; removing liquidity rounds the withdrawal down.
    Both returned amounts are non-negative.
    """
    _check_bounds(sqrt_p_lower, sqrt_p_upper)
    sqrt_p = min(max(sqrt_p, sqrt_p_lower), sqrt_p_upper)

    liquidity = from_d8(abs(liquidity_delta_d8))
    if liquidity_delta_d8 >= 0:
        amount0 = calc_amount0_delta(sqrt_p_upper, sqrt_p, liquidity)
        amount1 = calc_amount1_delta(sqrt_p_lower, sqrt_p, liquidity)
    else:
        amount0 = -calc_amount0_delta(sqrt_p, sqrt_p_upper, liquidity)
        amount1 = -calc_amount1_delta(sqrt_p, sqrt_p_lower, liquidity)
    return TokenAmounts(amount0, amount1)


def min_input_amounts_for_liquidity_d8(
    sqrt_p: int,
    sqrt_p_lower: int,
    sqrt_p_upper: int,
    liquidity_d8: int,
) -> TokenAmounts:
    """Minimum amounts that must be deposited to mint the given scaled liquidity."""
    if liquidity_d8 < 0:
        raise InvalidLiquidity(f"Liquidity must be non-negative, got {liquidity_d8}")
    return amounts_for_liquidity_delta_d8(sqrt_p, sqrt_p_lower, sqrt_p_upper, liquidity_d8)


def min_output_amounts_for_liquidity_d8(
    sqrt_p: int,
    sqrt_p_lower: int,
    sqrt_p_upper: int,
    liquidity_d8: int,
) -> TokenAmounts:
    """Minimum amounts received from burning the given scaled liquidity."""
    if liquidity_d8 < 0:
        raise InvalidLiquidity(f"Liquidity must be non-negative, got {liquidity_d8}")
    return amounts_for_liquidity_delta_d8(sqrt_p, sqrt_p_lower, sqrt_p_upper, -liquidity_d8)


def max_output_liquidity_d8_for_amounts(
    sqrt_p: int,
    sqrt_p_lower: int,
    sqrt_p_upper: int,
    amount0: int,
    amount1: int,
) -> int:
    """Maximum scaled liquidity obtainable from a token budget, rounded down.

    Below the range only token0 counts, above it only token1, and inside it
    the smaller of the two single-token bounds wins.
    """
    _check_bounds(sqrt_p_lower, sqrt_p_upper)

    if sqrt_p <= sqrt_p_lower:
        # L = Δx √P0 √P1 / (√P1 - √P0)
        liquidity = mul_div(amount0 * sqrt_p_lower, sqrt_p_upper, (sqrt_p_upper - sqrt_p_lower) * Q72)
    elif sqrt_p >= sqrt_p_upper:
        # L = Δy / (√P1 - √P0)
        liquidity = mul_div(amount1, Q72, sqrt_p_upper - sqrt_p_lower)
    else:
        liquidity0 = mul_div(amount0 * sqrt_p, sqrt_p_upper, (sqrt_p_upper - sqrt_p) * Q72)
        liquidity1 = mul_div(amount1, Q72, sqrt_p - sqrt_p_lower)
        liquidity = min(liquidity0, liquidity1)

    return to_d8(liquidity)
