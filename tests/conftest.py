"""Pytest configuration and fixtures."""

import pytest
import structlog

from muffin.entities import Pool, Position
from muffin.models import Token
from tests.helpers import E18, make_pool, make_token


@pytest.fixture(autouse=True)
def _quiet_logging():
    """Drop debug events during tests; individual tests may capture them."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(30))
    yield
    structlog.reset_defaults()


@pytest.fixture
def token0() -> Token:
    return make_token(0)


@pytest.fixture
def token1() -> Token:
    return make_token(1)


@pytest.fixture
def token2() -> Token:
    return make_token(2)


@pytest.fixture
def token3() -> Token:
    return make_token(3)


@pytest.fixture
def pool01(token0, token1) -> Pool:
    """Two no-fee tiers at price 1."""
    return make_pool(token0, token1)


@pytest.fixture
def pool12(token1, token2) -> Pool:
    return make_pool(token1, token2)


@pytest.fixture
def pool23(token2, token3) -> Pool:
    return make_pool(token2, token3)


@pytest.fixture
def pool02(token0, token2) -> Pool:
    return make_pool(token0, token2)


@pytest.fixture
def position(pool01) -> Position:
    """In-range position over ticks [-1, 2] at price 1 with 1e18 scaled liquidity."""
    return Position(pool=pool01, tier_id=0, tick_lower=-1, tick_upper=2, liquidity_d8=E18)
