import functools

from pooldepth.constants import MAX_UINT128, MAX_UINT256
from pooldepth.exceptions import EVMRevertError
from pooldepth.libraries._config import V3_LIB_CACHE_SIZE
from pooldepth.types.aliases import SqrtPriceX96, Tick

"""
Conversions between ticks and Q64.96 square root prices.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/TickMath.sol
"""

MIN_TICK = -887272
MAX_TICK = -MIN_TICK
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

# Minimum and ceiling of the maximum error when approximating log_sqrt10001(x) for prices in the
# range (2^-64, 2^64)
LOG_SQRT10001_MIN_ERROR = 291339464771989622907027621153398088495
LOG_SQRT10001_MAX_ERROR = 3402992956809132418596140100660247210

# 1/sqrt(1.0001)^(2^i) as Q128.128 values, keyed by the tick bit that selects them
_RATIO_MULTIPLIERS: tuple[tuple[int, int], ...] = (
    (0x2, 340248342086729790484326174814286782778),
    (0x4, 340214320654664324051920982716015181260),
    (0x8, 340146287995602323631171512101879684304),
    (0x10, 340010263488231146823593991679159461444),
    (0x20, 339738377640345403697157401104375502016),
    (0x40, 339195258003219555707034227454543997025),
    (0x80, 338111622100601834656805679988414885971),
    (0x100, 335954724994790223023589805789778977700),
    (0x200, 331682121138379247127172139078559817300),
    (0x400, 323299236684853023288211250268160618739),
    (0x800, 307163716377032989948697243942600083929),
    (0x1000, 277268403626896220162999269216087595045),
    (0x2000, 225923453940442621947126027127485391333),
    (0x4000, 149997214084966997727330242082538205943),
    (0x8000, 66119101136024775622716233608466517926),
    (0x10000, 12847376061809297530290974190478138313),
    (0x20000, 485053260817066172746253684029974020),
    (0x40000, 691415978906521570653435304214168),
    (0x80000, 1404880482679654955896180642),
)


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_sqrt_ratio_at_tick(tick: Tick) -> SqrtPriceX96:
    """
    Find the square root price in Q64.96 form for the given tick.
    """

    abs_tick = abs(tick)
    if abs_tick > MAX_TICK:
        raise EVMRevertError(error="required: abs_tick <= MAX_TICK")

    ratio = 340265354078544963557816517032075149313 if abs_tick & 0x1 else MAX_UINT128 + 1
    for tick_bit, multiplier in _RATIO_MULTIPLIERS:
        if abs_tick & tick_bit:
            ratio = (ratio * multiplier) >> 128

    if tick > 0:
        ratio = MAX_UINT256 // ratio

    # Q128.128 -> Q128.96, rounding up so that get_tick_at_sqrt_ratio of the result is consistent
    return (ratio >> 32) + (1 if ratio % (1 << 32) else 0)


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_tick_at_sqrt_ratio(sqrt_price_x96: SqrtPriceX96) -> Tick:
    """
    Find the greatest tick such that get_sqrt_ratio_at_tick(tick) <= sqrt_price_x96.
    """

    if not (MIN_SQRT_RATIO <= sqrt_price_x96 < MAX_SQRT_RATIO):
        raise EVMRevertError(error="R")

    ratio = sqrt_price_x96 << 32
    msb = ratio.bit_length() - 1
    r = ratio >> (msb - 127) if msb >= 128 else ratio << (127 - msb)  # noqa: PLR2004

    log_2 = (msb - 128) << 64
    for shift in range(63, 49, -1):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << shift
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141  # Q128.128

    tick_low = (log_sqrt10001 - LOG_SQRT10001_MAX_ERROR) >> 128
    tick_high = (log_sqrt10001 + LOG_SQRT10001_MIN_ERROR) >> 128

    if tick_low == tick_high:
        return tick_low
    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96 else tick_low
