"""Fee, sqrt price and tick/price conversion helpers.

Prices here are raw token ratios carried as exact ``Price`` objects. Tick
to price conversion interprets the tick in canonical (token0, token1)
order, so callers must pass real tokens, not native currencies.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from math import ceil

import structlog

from muffin.constants import E5, E10, MAX_SQRT_PRICE, MAX_TICK, MIN_SQRT_PRICE, MIN_TICK, Q144
from muffin.errors import InvalidPrice, InvalidTick, InvalidTickRange
from muffin.math.full_math import sqrt, sqrt_ceil
from muffin.math.tick_math import sqrt_price_to_tick, tick_to_sqrt_price
from muffin.models.currency import Token
from muffin.models.fractions import Price

logger = structlog.get_logger()

__all__ = [
    "is_valid_sqrt_gamma",
    "sqrt_gamma_to_fee",
    "sqrt_gamma_to_fee_percent",
    "fee_to_sqrt_gamma",
    "encode_sqrt_price",
    "is_sqrt_price_supported",
    "nearest_usable_tick",
    "tick_to_price",
    "price_to_closest_tick",
    "parse_price_string",
    "DEFAULT_TICK_TOLERANCE",
]

# Relative slack when checking whether a price already reaches the next tick
DEFAULT_TICK_TOLERANCE = Fraction(1, 10**21)


# ---------------------------------------------------------------------------
# Fee
# ---------------------------------------------------------------------------


def is_valid_sqrt_gamma(sqrt_gamma: object) -> bool:
    """True if sqrt_gamma is an integer in (0, 100000]."""
    return isinstance(sqrt_gamma, int) and not isinstance(sqrt_gamma, bool) and 0 < sqrt_gamma <= E5


def sqrt_gamma_to_fee(sqrt_gamma: int) -> Fraction:
    """Fee rate in [0, 1] for a sqrt gamma: 1 - sqrt_gamma^2 / 1e10."""
    return Fraction(E10 - sqrt_gamma * sqrt_gamma, E10)


def sqrt_gamma_to_fee_percent(sqrt_gamma: int) -> Fraction:
    """Fee rate in [0, 100]."""
    return sqrt_gamma_to_fee(sqrt_gamma) * 100


def fee_to_sqrt_gamma(fee: Fraction) -> int:
    """Smallest sqrt gamma whose fee does not exceed the given fee rate.

    Computes ceil(sqrt((1 - fee) * 1e10)) exactly.
    """
    gamma = (1 - Fraction(fee)) * E10
    if gamma < 0:
        raise InvalidPrice(f"Fee rate must not exceed 1, got {fee}")
    # ceil(sqrt(x)) == ceil(sqrt(ceil(x)))
    return sqrt_ceil(ceil(gamma))


# ---------------------------------------------------------------------------
# Sqrt price
# ---------------------------------------------------------------------------


def encode_sqrt_price(amount1: int, amount0: int) -> int:
    """Q56.72 sqrt price for the ratio amount1 / amount0, rounded down."""
    return sqrt((amount1 << 144) // amount0)


def is_sqrt_price_supported(sqrt_price: int) -> bool:
    return MIN_SQRT_PRICE <= sqrt_price <= MAX_SQRT_PRICE


# ---------------------------------------------------------------------------
# Tick
# ---------------------------------------------------------------------------


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """Round a tick to the nearest multiple of tick_spacing, halves rounding up.

    The result is stepped back by one spacing if rounding pushed it past
    the global tick bounds.
    """
    if isinstance(tick, bool) or not isinstance(tick, int) or not MIN_TICK <= tick <= MAX_TICK:
        raise InvalidTick(f"Tick must be an integer in [{MIN_TICK}, {MAX_TICK}], got {tick!r}")
    if not isinstance(tick_spacing, int) or tick_spacing <= 0:
        raise InvalidTickRange(f"Tick spacing must be a positive integer, got {tick_spacing!r}")

    rounded = ((2 * tick + tick_spacing) // (2 * tick_spacing)) * tick_spacing
    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded


# ---------------------------------------------------------------------------
# Price <> tick
# ---------------------------------------------------------------------------


def tick_to_price(base: Token, quote: Token, tick: int) -> Price:
    """Raw price of base in quote units at the given tick."""
    sqrt_price = tick_to_sqrt_price(tick)
    price_x144 = sqrt_price * sqrt_price
    if base.sorts_before(quote):
        return Price(base, quote, Fraction(price_x144, Q144))
    return Price(base, quote, Fraction(Q144, price_x144))


def price_to_closest_tick(price: Price, tolerance: Fraction = DEFAULT_TICK_TOLERANCE) -> int:
    """Greatest tick whose price is less than or equal to the given price.

    If the price multiplied by (1 + tolerance) already reaches the next
    tick's price, the next tick is returned instead. This absorbs the
    rounding lost when the price is squeezed into a sqrt price.
    """
    base, quote = price.base, price.quote_currency
    value = price.value
    is_sorted = base.sorts_before(quote)
    if is_sorted:
        sqrt_price = encode_sqrt_price(value.numerator, value.denominator)
    else:
        sqrt_price = encode_sqrt_price(value.denominator, value.numerator)

    tick = sqrt_price_to_tick(sqrt_price)
    next_tick_price = tick_to_price(base, quote, tick + 1).value
    factor = 1 + Fraction(tolerance)

    if is_sorted:
        if not value * factor < next_tick_price:
            tick += 1
    elif not value / factor > next_tick_price:
        tick += 1
    return tick


def parse_price_string(base: Token, quote: Token, text: str) -> Price | None:
    """Parse a human-readable, decimals-adjusted price into a raw Price.

    Returns None if the text is not a positive finite decimal number.
    """
    try:
        parsed = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        logger.debug("price_string_unparseable", text=text)
        return None
    if not parsed.is_finite() or parsed <= 0:
        logger.debug("price_string_not_positive", text=text)
        return None

    human = Fraction(parsed)
    return Price(base, quote, human * Fraction(10**quote.decimals, 10**base.decimals))
