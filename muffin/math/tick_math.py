"""Conversion between ticks and Q56.72 sqrt prices.

Bit-exact port of the protocol's TickMath library. A tick t maps to the
sqrt price sqrt(1.0001)^t; the forward direction walks a ladder of
precomputed Q128 constants, one per bit of |t|, and the reverse direction
computes a fixed-point log2 and disambiguates the +-1 tick window by
re-running the forward conversion.
"""

from __future__ import annotations

from muffin.constants import MAX_SQRT_PRICE, MAX_TICK, MAX_UINT256, MIN_SQRT_PRICE, MIN_TICK
from muffin.errors import InvalidSqrtPrice, InvalidTick
from muffin.math.full_math import most_significant_bit, mul_shift

__all__ = [
    "MIN_TICK",
    "MAX_TICK",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "tick_to_sqrt_price",
    "sqrt_price_to_tick",
]

Q56 = 1 << 56
Q128 = 1 << 128

# sqrt(1.0001)^(-2^i) in Q128, for bit i of |tick|
_TICK_LADDER = (
    0xFFFCB933BD6FAD37AA2D162D1A594001,
    0xFFF97272373D413259A46990580E213A,
    0xFFF2E50F5F656932EF12357CF3C7FDCC,
    0xFFE5CACA7E10E4E61C3624EAA0941CD0,
    0xFFCB9843D60F6159C9DB58835C926644,
    0xFF973B41FA98C081472E6896DFB254C0,
    0xFF2EA16466C96A3843EC78B326B52861,
    0xFE5DEE046A99A2A811C461F1969C3053,
    0xFCBE86C7900A88AEDCFFC83B479AA3A4,
    0xF987A7253AC413176F2B074CF7815E54,
    0xF3392B0822B70005940C7A398E4B70F3,
    0xE7159475A2C29B7443B29C7FA6E889D9,
    0xD097F3BDFD2022B8845AD8F792AA5825,
    0xA9F746462D870FDF8A65DC1F90E061E5,
    0x70D869A156D2A1B890BB3DF62BAF32F7,
    0x31BE135F97D08FD981231505542FCFA6,
    0x9AA508B5B7A84E1C677DE54F3E99BC9,
    0x5D6AF8DEDB81196699C329225EE604,
    0x2216E584F5FA1EA926041BEDFE98,
    0x48A170391F7DC42444E8FA2,
)

# log_sqrt(1.0001)(2) in Q64.64 -> Q128 scaling factor and the error bounds of the estimate
_LOG_SQRT10001_FACTOR = 255738958999603826347141
_TICK_HIGH_OFFSET = 17996007701288367970265332090599899137
_TICK_LOW_THRESHOLD_1 = -230154402537746701963478439606373042805014528
_TICK_LOW_OFFSET_1 = 98577143636729737466164032634120830977
_TICK_LOW_THRESHOLD_2 = -162097929153559009270803518120019400513814528
_TICK_LOW_OFFSET_2 = 527810000259722480933883300202676225


def tick_to_sqrt_price(tick: int) -> int:
    """Convert a tick to its Q56.72 sqrt price.

    Args:
        tick: Tick index in [MIN_TICK, MAX_TICK]

    Returns:
        sqrt(1.0001^tick) * 2^72, rounded up

    Raises:
        InvalidTick: If tick is not an integer or is out of bounds
    """
    if isinstance(tick, bool) or not isinstance(tick, int):
        raise InvalidTick(f"Tick must be an integer, got {tick!r}")
    if tick < MIN_TICK or tick > MAX_TICK:
        raise InvalidTick(f"Tick {tick} outside [{MIN_TICK}, {MAX_TICK}]")

    x = -tick if tick < 0 else tick

    ratio = Q128
    for bit, multiplier in enumerate(_TICK_LADDER):
        if x & (1 << bit):
            ratio = mul_shift(ratio, multiplier)

    if tick > 0:
        ratio = MAX_UINT256 // ratio

    # Q128 -> Q72, rounding up
    return (ratio >> 56) + (1 if ratio % Q56 else 0)


def sqrt_price_to_tick(sqrt_price: int) -> int:
    """Convert a Q56.72 sqrt price to the greatest tick whose sqrt price is <= it.

    Raises:
        InvalidSqrtPrice: If sqrt_price is out of bounds
    """
    if sqrt_price < MIN_SQRT_PRICE or sqrt_price > MAX_SQRT_PRICE:
        raise InvalidSqrtPrice(f"Sqrt price {sqrt_price} outside [{MIN_SQRT_PRICE}, {MAX_SQRT_PRICE}]")

    msb = most_significant_bit(sqrt_price)
    log2 = (msb - 72) << 64
    z = sqrt_price << (127 - msb)

    # 18 bits of fractional precision are enough to isolate a 1-tick window
    for i in range(18):
        z = (z * z) >> 127
        if z >= Q128:
            z >>= 1
            log2 |= 1 << (63 - i)

    log_base_sqrt10001 = log2 * _LOG_SQRT10001_FACTOR
    tick_high = (log_base_sqrt10001 + _TICK_HIGH_OFFSET) >> 128

    if log_base_sqrt10001 < _TICK_LOW_THRESHOLD_1:
        low_offset = _TICK_LOW_OFFSET_1
    elif log_base_sqrt10001 < _TICK_LOW_THRESHOLD_2:
        low_offset = _TICK_LOW_OFFSET_2
    else:
        low_offset = 0
    tick_low = (log_base_sqrt10001 - low_offset) >> 128

    if tick_low == tick_high or sqrt_price >= tick_to_sqrt_price(tick_high):
        return tick_high
    return tick_low
