from .estimator import BatchEstimator, estimate
from .target import get_target_sqrt_price
from .types import DepthConfig, DepthRequest, PoolSnapshot, Side, TokenUnit
from .walker import integrate

__all__ = (
    "BatchEstimator",
    "DepthConfig",
    "DepthRequest",
    "PoolSnapshot",
    "Side",
    "TokenUnit",
    "estimate",
    "get_target_sqrt_price",
    "integrate",
)
