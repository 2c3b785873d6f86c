from .config import settings
from .version import __version__

# isort: split

from .depth import (
    BatchEstimator,
    DepthConfig,
    DepthRequest,
    PoolSnapshot,
    Side,
    TokenUnit,
    estimate,
    get_target_sqrt_price,
    integrate,
)
from .logging import logger
from .providers import InMemoryPoolStateProvider, UniswapV3PoolStateProvider
from .types.abstract import AbstractPoolStateProvider

__all__ = (
    "AbstractPoolStateProvider",
    "BatchEstimator",
    "DepthConfig",
    "DepthRequest",
    "InMemoryPoolStateProvider",
    "PoolSnapshot",
    "Side",
    "TokenUnit",
    "UniswapV3PoolStateProvider",
    "__version__",
    "estimate",
    "get_target_sqrt_price",
    "integrate",
    "logger",
    "settings",
)
