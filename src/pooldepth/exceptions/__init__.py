from pooldepth.exceptions.base import PooldepthError, PooldepthValueError
from pooldepth.exceptions.depth import (
    BatchLengthMismatch,
    DepthEstimationError,
    SearchIterationLimitExceeded,
)
from pooldepth.exceptions.evm import EVMRevertError
from pooldepth.exceptions.pool_state import PoolStateError, PoolStateFetchingError, UnknownPool

from . import depth, evm, pool_state

__all__ = (
    "BatchLengthMismatch",
    "DepthEstimationError",
    "EVMRevertError",
    "PoolStateError",
    "PoolStateFetchingError",
    "PooldepthError",
    "PooldepthValueError",
    "SearchIterationLimitExceeded",
    "UnknownPool",
    "depth",
    "evm",
    "pool_state",
)
