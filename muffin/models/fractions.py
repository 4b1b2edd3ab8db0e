"""Exact rational value objects: currency amounts and prices.

Both wrap a ``fractions.Fraction`` so that chained price and amount
arithmetic never loses precision; rounding happens only when a caller asks
for an integer ``quotient`` or a formatted string.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from fractions import Fraction
from math import floor

from muffin.errors import InvalidPrice
from muffin.models.currency import Currency

__all__ = ["CurrencyAmount", "Price", "to_fraction", "format_significant", "format_fixed"]


def to_fraction(value: Fraction | Decimal | int | str) -> Fraction:
    """Coerce a numeric input to an exact Fraction.

    Floats are rejected since they silently carry binary rounding error.
    """
    if isinstance(value, float):
        raise TypeError("Use Fraction, Decimal, int or str instead of float for exact values")
    return Fraction(value)


def format_significant(value: Fraction, digits: int = 6) -> str:
    """Format with at most ``digits`` significant digits, rounding half up."""
    if value == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = digits
        ctx.rounding = ROUND_HALF_UP
        quotient = Decimal(value.numerator) / Decimal(value.denominator)
        return format(quotient.normalize(), "f")


def format_fixed(value: Fraction, places: int = 4) -> str:
    """Format with exactly ``places`` decimal places, rounding half up."""
    sign = "-" if value < 0 else ""
    rounded = floor(abs(value) * 10**places + Fraction(1, 2))
    if places == 0:
        return f"{sign}{rounded}"
    text = str(rounded).rjust(places + 1, "0")
    return f"{sign}{text[:-places]}.{text[-places:]}"


@dataclass(frozen=True)
class CurrencyAmount:
    """An amount of a currency in raw (smallest) units, possibly fractional."""

    currency: Currency
    value: Fraction

    @classmethod
    def from_raw_amount(cls, currency: Currency, raw_amount: int) -> CurrencyAmount:
        return cls(currency, Fraction(raw_amount))

    @classmethod
    def from_fractional_amount(cls, currency: Currency, numerator: int, denominator: int) -> CurrencyAmount:
        return cls(currency, Fraction(numerator, denominator))

    @property
    def quotient(self) -> int:
        """Raw amount rounded down."""
        return floor(self.value)

    @property
    def wrapped(self) -> CurrencyAmount:
        return CurrencyAmount(self.currency.wrapped, self.value)

    def _check_currency(self, other: CurrencyAmount) -> None:
        if self.currency != other.currency:
            raise InvalidPrice(f"Currency mismatch: {self.currency} != {other.currency}")

    def add(self, other: CurrencyAmount) -> CurrencyAmount:
        self._check_currency(other)
        return CurrencyAmount(self.currency, self.value + other.value)

    def subtract(self, other: CurrencyAmount) -> CurrencyAmount:
        self._check_currency(other)
        return CurrencyAmount(self.currency, self.value - other.value)

    def multiply(self, factor: Fraction | int) -> CurrencyAmount:
        return CurrencyAmount(self.currency, self.value * factor)

    def divide(self, other: CurrencyAmount) -> Fraction:
        """Ratio of two amounts of the same currency."""
        self._check_currency(other)
        return self.value / other.value

    def to_significant(self, digits: int = 6) -> str:
        return format_significant(self.value / 10**self.currency.decimals, digits)

    def to_fixed(self, places: int = 4) -> str:
        return format_fixed(self.value / 10**self.currency.decimals, places)


@dataclass(frozen=True)
class Price:
    """Exchange rate in raw units: how many raw ``quote`` units one raw ``base`` unit buys."""

    base: Currency
    quote_currency: Currency
    value: Fraction

    @classmethod
    def from_amounts(cls, base: Currency, quote: Currency, base_amount: int, quote_amount: int) -> Price:
        """Price implied by exchanging ``base_amount`` of base for ``quote_amount`` of quote."""
        return cls(base, quote, Fraction(quote_amount, base_amount))

    @property
    def scalar(self) -> Fraction:
        """Factor converting the raw value into whole-unit terms."""
        return Fraction(10**self.base.decimals, 10**self.quote_currency.decimals)

    @property
    def adjusted(self) -> Fraction:
        """Price in whole units of each currency, i.e. decimals-adjusted."""
        return self.value * self.scalar

    def invert(self) -> Price:
        return Price(self.quote_currency, self.base, 1 / self.value)

    def multiply(self, other: Price) -> Price:
        """Chain two prices, e.g. A->B times B->C gives A->C."""
        if self.quote_currency != other.base:
            raise InvalidPrice(f"Cannot chain prices: {self.quote_currency} != {other.base}")
        return Price(self.base, other.quote_currency, self.value * other.value)

    def quote(self, amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency."""
        if amount.currency != self.base:
            raise InvalidPrice(f"Amount currency {amount.currency} is not the price base {self.base}")
        return CurrencyAmount(self.quote_currency, amount.value * self.value)

    def to_significant(self, digits: int = 6) -> str:
        return format_significant(self.adjusted, digits)

    def to_fixed(self, places: int = 4) -> str:
        return format_fixed(self.adjusted, places)
