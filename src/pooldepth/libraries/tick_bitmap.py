"""
Search over the packed tick initialization bitmap.

Bit `b` of word `w` is set when the tick at compressed index `w * 256 + b` has a non-zero liquidity
delta. Ticks are compressed by dividing by the tick spacing.

Callers must keep tick and tick spacing within the int24 tick range. The compressed index
arithmetic here performs no overflow checking.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/TickBitmap.sol
"""

from collections.abc import Callable, MutableMapping

from pooldepth.constants import MAX_UINT8, MAX_UINT256, TICKS_PER_WORD
from pooldepth.exceptions import PooldepthValueError, SearchIterationLimitExceeded
from pooldepth.libraries.bit_math import least_significant_bit, most_significant_bit
from pooldepth.libraries.tick_math import get_tick_at_sqrt_ratio
from pooldepth.types.aliases import BitmapWord, SqrtPriceX96, Tick, Word


type WordReader = Callable[[Word], BitmapWord]


def compress(tick: Tick, tick_spacing: int) -> int:
    """
    Compress a tick by the tick spacing. Python floor division rounds toward negative infinity, so
    negative ticks that are not a multiple of the spacing land in the lower slot, unlike the
    truncating division in Solidity.
    """

    return tick // tick_spacing


def position(tick: int) -> tuple[Word, int]:
    """
    Computes the position in the tick initialization bitmap for the given compressed tick.

    This function does not account for tick spacing. Use `compress` first for real ticks.
    """

    return (
        tick >> 8,  # word_pos
        tick % TICKS_PER_WORD,  # bit_pos
    )


def set_tick_initialized(
    tick_bitmap: MutableMapping[Word, BitmapWord],
    tick: Tick,
    tick_spacing: int,
    initialized: bool,
) -> None:
    """
    Set or clear the initialization bit for a tick. The tick must lie on the tick spacing.
    """

    if tick % tick_spacing != 0:
        raise PooldepthValueError(message=f"Tick {tick} not correctly spaced for {tick_spacing}!")

    word_pos, bit_pos = position(compress(tick, tick_spacing))
    bitmap = tick_bitmap.get(word_pos, 0)
    tick_bitmap[word_pos] = bitmap | (1 << bit_pos) if initialized else bitmap & ~(1 << bit_pos)


def next_initialized_tick_within_one_word(
    get_word: WordReader,
    tick: Tick,
    tick_spacing: int,
    less_than_or_equal: bool,
) -> tuple[Tick, bool]:
    """
    Find the next initialized tick contained in the same word as the tick that is either at or to
    the left of it (`less_than_or_equal=True`), or strictly to the right of it.

    Returns the tick and a flag marking whether it is initialized. When no initialized tick is found
    in the word, the tick at the far edge of the word in the direction of search is returned with the
    flag unset, so the caller can continue from the adjacent word.
    """

    compressed = compress(tick, tick_spacing)

    if less_than_or_equal:
        word_pos, bit_pos = position(compressed)

        # all the 1s at or to the right of the current bit_pos
        mask = (1 << (bit_pos + 1)) - 1
        masked = get_word(word_pos) & mask

        initialized = masked != 0
        next_compressed = (
            compressed - (bit_pos - most_significant_bit(masked))
            if initialized
            else compressed - bit_pos
        )
    else:
        # start from the word of the next tick, since the current tick state doesn't matter
        word_pos, bit_pos = position(compressed + 1)

        # all the 1s at or to the left of the bit_pos
        mask = MAX_UINT256 ^ ((1 << bit_pos) - 1)
        masked = get_word(word_pos) & mask

        initialized = masked != 0
        next_compressed = (
            compressed + 1 + (least_significant_bit(masked) - bit_pos)
            if initialized
            else compressed + 1 + (MAX_UINT8 - bit_pos)
        )

    return next_compressed * tick_spacing, initialized


def next_initialized_tick(
    get_word: WordReader,
    tick: Tick,
    tick_spacing: int,
    moving_up: bool,
    limit_sqrt_price_x96: SqrtPriceX96,
    max_words: int | None = None,
) -> Tick:
    """
    Search word by word for the next initialized tick in the direction of travel, giving up once
    the candidate tick lies past the tick holding the limit price.

    Moving up, the search is strictly above `tick`. Moving down, it is at or below `tick`. The
    returned tick may lie beyond the limit, so callers must clip amounts to the limit price.

    If `max_words` is set, reading more than that many bitmap words raises
    `SearchIterationLimitExceeded`.
    """

    limit_tick = get_tick_at_sqrt_ratio(limit_sqrt_price_x96)
    if moving_up:
        # the tick holding the limit price is still below it, so the first tick past it is one higher
        limit_tick += 1

    words_read = 0
    while True:
        if max_words is not None and words_read >= max_words:
            raise SearchIterationLimitExceeded(words=max_words)

        next_tick, initialized = next_initialized_tick_within_one_word(
            get_word=get_word,
            tick=tick,
            tick_spacing=tick_spacing,
            less_than_or_equal=not moving_up,
        )
        words_read += 1

        if initialized:
            return next_tick

        if moving_up:
            if next_tick >= limit_tick:
                return next_tick
            # the miss is the highest tick in the word, so the next search starts in the word above
            tick = next_tick
        else:
            if next_tick <= limit_tick:
                return next_tick
            # the miss is the lowest tick in the word, step below it to reach the word beneath
            tick = next_tick - 1
