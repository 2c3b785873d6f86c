import dataclasses
import functools

from pooldepth.depth.types import PoolSnapshot, TokenUnit
from pooldepth.libraries.liquidity_math import add_delta_saturating
from pooldepth.libraries.sqrt_price_math import get_amount0_delta, get_amount1_delta
from pooldepth.libraries.tick_bitmap import next_initialized_tick
from pooldepth.libraries.tick_math import MAX_TICK, MIN_TICK, get_sqrt_ratio_at_tick
from pooldepth.logging import logger
from pooldepth.types.abstract import AbstractPoolStateProvider
from pooldepth.types.aliases import Liquidity, SqrtPriceX96, Tick


@dataclasses.dataclass(slots=True)
class WalkState:
    amount: int
    sqrt_price_x96: SqrtPriceX96
    liquidity: Liquidity


@dataclasses.dataclass(slots=True)
class StepComputations:
    tick_next: Tick
    sqrt_price_next_x96: SqrtPriceX96


def integrate(
    provider: AbstractPoolStateProvider,
    snapshot: PoolSnapshot,
    moving_up: bool,
    unit: TokenUnit,
    target_sqrt_price_x96: SqrtPriceX96,
    max_search_words: int | None = None,
) -> int:
    """
    Calculate the amount of `unit` needed to move the pool price from its current value to the
    target price, crossing initialized ticks along the way.

    The walk starts from the snapshot values and advances one initialized tick at a time. Each
    interval between ticks is priced at the liquidity active inside it. The final interval is cut at
    the target price, which usually lies strictly between two ticks.

    Amounts are rounded down. Intervals without liquidity contribute nothing.
    """

    get_word = functools.partial(provider.get_boundary_word, snapshot.address)
    get_amount_delta = get_amount0_delta if unit is TokenUnit.TOKEN0 else get_amount1_delta

    def find_next_step(tick: Tick) -> StepComputations:
        tick_next = next_initialized_tick(
            get_word=get_word,
            tick=tick,
            tick_spacing=snapshot.tick_spacing,
            moving_up=moving_up,
            limit_sqrt_price_x96=target_sqrt_price_x96,
            max_words=max_search_words,
        )
        # The bitmap is not aware of the tick bounds, so the search may land outside of them
        tick_next = min(MAX_TICK, tick_next) if moving_up else max(MIN_TICK, tick_next)
        return StepComputations(
            tick_next=tick_next,
            sqrt_price_next_x96=get_sqrt_ratio_at_tick(tick_next),
        )

    def target_not_reached(sqrt_price_x96: SqrtPriceX96) -> bool:
        return (
            sqrt_price_x96 < target_sqrt_price_x96
            if moving_up
            else target_sqrt_price_x96 < sqrt_price_x96
        )

    def overshoots_target(sqrt_price_x96: SqrtPriceX96) -> bool:
        return (
            sqrt_price_x96 > target_sqrt_price_x96
            if moving_up
            else sqrt_price_x96 < target_sqrt_price_x96
        )

    state = WalkState(
        amount=0,
        sqrt_price_x96=snapshot.sqrt_price_x96,
        liquidity=snapshot.liquidity,
    )
    step = find_next_step(snapshot.tick)

    while target_not_reached(state.sqrt_price_x96):
        if overshoots_target(step.sqrt_price_next_x96):
            # The next initialized tick lies past the target, so finish inside this interval
            state.amount += get_amount_delta(
                state.sqrt_price_x96,
                target_sqrt_price_x96,
                state.liquidity,
            )
            break

        state.amount += get_amount_delta(
            state.sqrt_price_x96,
            step.sqrt_price_next_x96,
            state.liquidity,
        )

        tick_crossed = step.tick_next
        liquidity_net = provider.get_liquidity_delta(snapshot.address, tick_crossed)
        if not moving_up:
            # Crossing downward removes the liquidity added when crossing upward. The search resumes
            # below the crossed tick, since an at-or-below search would find it again.
            liquidity_net = -liquidity_net
            step.tick_next -= 1

        state.liquidity = add_delta_saturating(state.liquidity, liquidity_net)
        state.sqrt_price_x96 = step.sqrt_price_next_x96
        logger.debug(
            f"Crossed tick {tick_crossed} on {snapshot.address}, liquidity now {state.liquidity}"
        )

        step = find_next_step(step.tick_next)

    return state.amount
