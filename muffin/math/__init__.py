"""Fixed-point math matching the on-chain Muffin libraries."""

from muffin.math.full_math import ceil_div, from_d8, mul_div, to_d8
from muffin.math.pool_math import (
    TokenAmounts,
    amounts_for_liquidity_delta_d8,
    calc_amount0_delta,
    calc_amount1_delta,
    max_output_liquidity_d8_for_amounts,
    min_input_amounts_for_liquidity_d8,
    min_output_amounts_for_liquidity_d8,
)
from muffin.math.price import (
    encode_sqrt_price,
    fee_to_sqrt_gamma,
    is_sqrt_price_supported,
    is_valid_sqrt_gamma,
    nearest_usable_tick,
    parse_price_string,
    price_to_closest_tick,
    sqrt_gamma_to_fee,
    sqrt_gamma_to_fee_percent,
    tick_to_price,
)
from muffin.math.tick_math import sqrt_price_to_tick, tick_to_sqrt_price

__all__ = [
    # Arithmetic
    "ceil_div",
    "mul_div",
    "from_d8",
    "to_d8",
    # Tick math
    "tick_to_sqrt_price",
    "sqrt_price_to_tick",
    # Pool math
    "TokenAmounts",
    "calc_amount0_delta",
    "calc_amount1_delta",
    "amounts_for_liquidity_delta_d8",
    "min_input_amounts_for_liquidity_d8",
    "min_output_amounts_for_liquidity_d8",
    "max_output_liquidity_d8_for_amounts",
    # Fees and prices
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
]
