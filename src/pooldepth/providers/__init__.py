from .memory import InMemoryPoolStateProvider
from .onchain import UniswapV3PoolStateProvider

__all__ = (
    "InMemoryPoolStateProvider",
    "UniswapV3PoolStateProvider",
)
