from pooldepth.constants import MAX_INT128, MAX_UINT128, MIN_INT128, MIN_UINT128
from pooldepth.exceptions import EVMRevertError
from pooldepth.logging import logger


def add_delta(x: int, y: int) -> int:
    """
    Add a signed liquidity delta to an unsigned liquidity value, reverting if the result does not
    fit in a uint128.

    The result is range-checked directly instead of relying on the casting tricks used by
    https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/LiquidityMath.sol
    """

    if not (MIN_UINT128 <= x <= MAX_UINT128):
        raise EVMRevertError(error="x not a valid uint128")
    if not (MIN_INT128 <= y <= MAX_INT128):
        raise EVMRevertError(error="y not a valid int128")

    z = x + y

    if y < 0 and not (MIN_UINT128 <= z <= MAX_UINT128):
        raise EVMRevertError(error="LS")
    if not (MIN_UINT128 <= z <= MAX_UINT128):
        raise EVMRevertError(error="LA")

    return z


def add_delta_saturating(x: int, y: int) -> int:
    """
    Add a signed liquidity delta to an unsigned liquidity value, clamping the result to the uint128
    range instead of reverting.

    A clamp only happens when the recorded tick deltas are inconsistent with the active liquidity,
    so it is logged as a warning.
    """

    z = x + y

    if z < MIN_UINT128:
        logger.warning(f"Liquidity underflow clamped to zero: {x} + ({y})")
        return MIN_UINT128
    if z > MAX_UINT128:
        logger.warning(f"Liquidity overflow clamped to max(uint128): {x} + {y}")
        return MAX_UINT128

    return z
