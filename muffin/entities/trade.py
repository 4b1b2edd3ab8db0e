"""Trade: one or more routes swapping the same input for the same output.

A trade is built from amounts simulated elsewhere (e.g. by an on-chain
quoter); it only aggregates them and derives slippage bounds. Pools may
not be shared between routes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from functools import cached_property
from math import floor

from muffin.entities.route import Route
from muffin.errors import DuplicatedPools, InvalidSlippage, MismatchedCurrencies
from muffin.models.currency import Currency
from muffin.models.fractions import CurrencyAmount, Price


class TradeType(str, Enum):
    """Which side of the trade is fixed."""

    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


@dataclass(frozen=True)
class Swap:
    """One route of a trade with its simulated amounts."""

    route: Route
    input_amount: CurrencyAmount
    output_amount: CurrencyAmount


def _check_slippage(slippage: Fraction) -> Fraction:
    slippage = Fraction(slippage)
    if slippage < 0:
        raise InvalidSlippage(f"Slippage tolerance must be non-negative, got {slippage}")
    return slippage


@dataclass(frozen=True)
class Trade:
    """An aggregated multi-route trade.

    Attributes:
        swaps: Routes with their input and output amounts
        trade_type: Whether the input or the output amount is exact
        input_currency: Currency of the first swap's input amount
        output_currency: Currency of the first swap's output amount
    """

    swaps: tuple[Swap, ...]
    trade_type: TradeType
    input_currency: Currency = field(init=False)
    output_currency: Currency = field(init=False)

    def __post_init__(self) -> None:
        swaps = tuple(self.swaps)
        object.__setattr__(self, "swaps", swaps)
        if not swaps:
            raise MismatchedCurrencies("A trade needs at least one swap")

        input_currency = swaps[0].input_amount.currency
        output_currency = swaps[0].output_amount.currency
        for swap in swaps:
            if (
                swap.route.input.wrapped != input_currency.wrapped
                or swap.input_amount.currency.wrapped != input_currency.wrapped
            ):
                raise MismatchedCurrencies("All swaps of a trade must share one input currency")
            if (
                swap.route.output.wrapped != output_currency.wrapped
                or swap.output_amount.currency.wrapped != output_currency.wrapped
            ):
                raise MismatchedCurrencies("All swaps of a trade must share one output currency")

        pool_ids = [pool.pool_id for swap in swaps for pool in swap.route.pools]
        if len(pool_ids) != len(set(pool_ids)):
            raise DuplicatedPools("A pool is used more than once across the trade's routes")

        object.__setattr__(self, "input_currency", input_currency)
        object.__setattr__(self, "output_currency", output_currency)

    @classmethod
    def create_unchecked_trade(
        cls,
        route: Route,
        input_amount: CurrencyAmount,
        output_amount: CurrencyAmount,
        trade_type: TradeType,
    ) -> Trade:
        """Trade over a single route from externally simulated amounts."""
        return cls((Swap(route, input_amount, output_amount),), trade_type)

    @classmethod
    def create_unchecked_trade_with_multiple_routes(cls, swaps: Sequence[Swap], trade_type: TradeType) -> Trade:
        return cls(tuple(swaps), trade_type)

    @cached_property
    def input_amount(self) -> CurrencyAmount:
        """Total input of all swaps, assuming no slippage."""
        return CurrencyAmount(self.input_currency, sum((swap.input_amount.value for swap in self.swaps), Fraction(0)))

    @cached_property
    def output_amount(self) -> CurrencyAmount:
        """Total output of all swaps, assuming no slippage."""
        return CurrencyAmount(
            self.output_currency, sum((swap.output_amount.value for swap in self.swaps), Fraction(0))
        )

    @cached_property
    def execution_price(self) -> Price:
        """Output per input of the whole trade."""
        return Price.from_amounts(
            self.input_currency, self.output_currency, self.input_amount.quotient, self.output_amount.quotient
        )

    def minimum_amount_out(self, slippage: Fraction, amount_out: CurrencyAmount | None = None) -> CurrencyAmount:
        """Least output to accept for the given slippage tolerance.

        Exact-output trades return the amount unchanged; exact-input trades
        divide it by (1 + slippage), rounding down.
        """
        slippage = _check_slippage(slippage)
        amount_out = amount_out or self.output_amount
        if self.trade_type == TradeType.EXACT_OUTPUT:
            return amount_out
        adjusted = floor(Fraction(amount_out.quotient) / (1 + slippage))
        return CurrencyAmount.from_raw_amount(amount_out.currency, adjusted)

    def maximum_amount_in(self, slippage: Fraction, amount_in: CurrencyAmount | None = None) -> CurrencyAmount:
        """Most input to spend for the given slippage tolerance.

        Exact-input trades return the amount unchanged; exact-output trades
        multiply it by (1 + slippage), rounding down.
        """
        slippage = _check_slippage(slippage)
        amount_in = amount_in or self.input_amount
        if self.trade_type == TradeType.EXACT_INPUT:
            return amount_in
        adjusted = floor(amount_in.quotient * (1 + slippage))
        return CurrencyAmount.from_raw_amount(amount_in.currency, adjusted)

    def worst_execution_price(self, slippage: Fraction) -> Price:
        """Execution price at the edge of the slippage tolerance."""
        return Price.from_amounts(
            self.input_currency,
            self.output_currency,
            self.maximum_amount_in(slippage).quotient,
            self.minimum_amount_out(slippage).quotient,
        )


__all__ = ["Trade", "TradeType", "Swap"]
