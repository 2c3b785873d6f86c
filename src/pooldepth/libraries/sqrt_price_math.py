import functools

from pooldepth.exceptions import EVMRevertError
from pooldepth.libraries._config import V3_LIB_CACHE_SIZE
from pooldepth.libraries.constants import Q96, Q96_RESOLUTION
from pooldepth.libraries.full_math import muldiv, muldiv_rounding_up
from pooldepth.libraries.unsafe_math import div_rounding_up

"""
Token amounts required to move the price across a range at constant liquidity.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/SqrtPriceMath.sol
"""


def _sorted_prices(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> tuple[int, int]:
    return (
        (sqrt_ratio_b_x96, sqrt_ratio_a_x96)
        if sqrt_ratio_a_x96 > sqrt_ratio_b_x96
        else (sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    )


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False,
) -> int:
    """
    Calculate the amount of token0 between two prices at the given liquidity:
    liquidity / sqrt(lower) - liquidity / sqrt(upper)

    The prices may be given in either order. Depth estimates round down, which is the default.
    """

    if liquidity < 0:
        raise EVMRevertError(error="required: liquidity >= 0")

    sqrt_ratio_lower_x96, sqrt_ratio_upper_x96 = _sorted_prices(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if not (sqrt_ratio_lower_x96 > 0):
        raise EVMRevertError(error="required: sqrt_ratio_a_x96 > 0")

    numerator1 = liquidity << Q96_RESOLUTION
    numerator2 = sqrt_ratio_upper_x96 - sqrt_ratio_lower_x96

    return (
        div_rounding_up(
            muldiv_rounding_up(numerator1, numerator2, sqrt_ratio_upper_x96),
            sqrt_ratio_lower_x96,
        )
        if round_up
        else muldiv(numerator1, numerator2, sqrt_ratio_upper_x96) // sqrt_ratio_lower_x96
    )


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False,
) -> int:
    """
    Calculate the amount of token1 between two prices at the given liquidity:
    liquidity * (sqrt(upper) - sqrt(lower))
    """

    if liquidity < 0:
        raise EVMRevertError(error="required: liquidity >= 0")

    sqrt_ratio_lower_x96, sqrt_ratio_upper_x96 = _sorted_prices(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    return (
        muldiv_rounding_up(liquidity, sqrt_ratio_upper_x96 - sqrt_ratio_lower_x96, Q96)
        if round_up
        else muldiv(liquidity, sqrt_ratio_upper_x96 - sqrt_ratio_lower_x96, Q96)
    )
