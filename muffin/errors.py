"""Muffin error classes.

Every error is raised eagerly where an invariant is violated. All of them
derive from ValueError, so generic argument-validation handlers still work.
"""


class MuffinError(ValueError):
    """Base error for Muffin math and entity construction."""

    pass


class InvalidTick(MuffinError):
    """Tick is not an integer or lies outside [MIN_TICK, MAX_TICK]."""

    pass


class InvalidSqrtPrice(MuffinError):
    """Sqrt price lies outside [MIN_SQRT_PRICE, MAX_SQRT_PRICE]."""

    pass


class InvalidTickRange(MuffinError):
    """Lower tick is not below upper tick, or ticks are misaligned to tick spacing."""

    pass


class InvalidTier(MuffinError):
    """Tier index out of range, or sqrt gamma outside (0, 100000]."""

    pass


class InvalidLimitOrderState(MuffinError):
    """Settled position without a limit-order direction."""

    pass


class InvalidPath(MuffinError):
    """Pools do not chain the input token to the output token."""

    pass


class InvalidTierMask(MuffinError):
    """Tier mask is zero, selects no existing tier, or count mismatches pools."""

    pass


class DuplicatedPools(MuffinError):
    """The same pool is used by more than one swap leg of a trade."""

    pass


class MismatchedCurrencies(MuffinError):
    """Swaps of a trade disagree on the input or output currency."""

    pass


class InvalidSlippage(MuffinError):
    """Slippage tolerance is negative."""

    pass


class InvalidLiquidity(MuffinError):
    """Liquidity amount is negative, or zero where positive is required."""

    pass


class InvalidHops(MuffinError):
    """Simulated hops do not line up with the routes or pools they describe."""

    pass


class InvalidToken(MuffinError):
    """Token address is malformed, or a token is not part of a pool."""

    pass


class InvalidPrice(MuffinError):
    """Price units do not match, or a price cannot be represented."""

    pass


__all__ = [
    "MuffinError",
    "InvalidTick",
    "InvalidSqrtPrice",
    "InvalidTickRange",
    "InvalidTier",
    "InvalidLimitOrderState",
    "InvalidPath",
    "InvalidTierMask",
    "DuplicatedPools",
    "MismatchedCurrencies",
    "InvalidSlippage",
    "InvalidLiquidity",
    "InvalidHops",
    "InvalidToken",
    "InvalidPrice",
]
