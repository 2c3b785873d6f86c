from pooldepth.exceptions import PooldepthValueError
from pooldepth.libraries.tick_math import MAX_SQRT_RATIO, MIN_SQRT_RATIO
from pooldepth.types.aliases import SqrtPriceX96


def get_target_sqrt_price(
    sqrt_price_x96: SqrtPriceX96,
    offset: int,
    moving_up: bool,
) -> SqrtPriceX96:
    """
    Resolve a depth offset into the square root price the walk should stop at.

    The offset is added to the current price when moving up and subtracted when moving down. The
    result is kept inside the range accepted by `get_tick_at_sqrt_ratio`.
    """

    if offset < 0:
        raise PooldepthValueError(message=f"Depth offset must be non-negative, got {offset}.")

    if moving_up:
        return min(sqrt_price_x96 + offset, MAX_SQRT_RATIO - 1)
    return max(sqrt_price_x96 - offset, MIN_SQRT_RATIO)
