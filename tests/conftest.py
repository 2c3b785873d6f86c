import logging
from collections.abc import Callable

import pytest

from pooldepth.depth.types import PoolSnapshot
from pooldepth.libraries.tick_math import get_sqrt_ratio_at_tick
from pooldepth.logging import logger
from pooldepth.providers.memory import InMemoryPoolStateProvider

# Mainnet Uniswap V3 WETH/USDC 0.05% and 0.3% pools
POOL_ADDRESS = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"
OTHER_POOL_ADDRESS = "0x8ad599c3A0ff1De082011EFDDc58f1908eb6e6D8"


@pytest.fixture(scope="session", autouse=True)
def _set_pooldepth_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def pool_address() -> str:
    return POOL_ADDRESS


@pytest.fixture
def other_pool_address() -> str:
    return OTHER_POOL_ADDRESS


def _make_snapshot(
    address: str = POOL_ADDRESS,
    tick: int = 0,
    liquidity: int = 0,
    tick_spacing: int = 1,
    sqrt_price_x96: int | None = None,
) -> PoolSnapshot:
    """
    Build a snapshot with the price at the lower edge of `tick` unless a price is given.
    """
    return PoolSnapshot(
        address=address,
        sqrt_price_x96=(
            sqrt_price_x96 if sqrt_price_x96 is not None else get_sqrt_ratio_at_tick(tick)
        ),
        tick=tick,
        liquidity=liquidity,
        tick_spacing=tick_spacing,
    )


@pytest.fixture
def make_snapshot() -> Callable[..., PoolSnapshot]:
    return _make_snapshot


@pytest.fixture
def provider() -> InMemoryPoolStateProvider:
    return InMemoryPoolStateProvider()
