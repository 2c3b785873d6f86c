import hypothesis
import hypothesis.strategies
import pytest

from pooldepth.depth.types import TokenUnit
from pooldepth.depth.walker import integrate
from pooldepth.exceptions import SearchIterationLimitExceeded
from pooldepth.libraries.sqrt_price_math import get_amount0_delta, get_amount1_delta
from pooldepth.libraries.tick_math import MAX_SQRT_RATIO, get_sqrt_ratio_at_tick
from pooldepth.providers.memory import InMemoryPoolStateProvider


def test_zero_liquidity_costs_nothing(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=0, tick_spacing=10)
    provider.add_pool(snapshot)

    for moving_up, target_tick in ((True, 500), (False, -300)):
        for unit in TokenUnit:
            assert (
                integrate(
                    provider=provider,
                    snapshot=snapshot,
                    moving_up=moving_up,
                    unit=unit,
                    target_sqrt_price_x96=get_sqrt_ratio_at_tick(target_tick),
                )
                == 0
            )


def test_target_at_current_price_costs_nothing(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=10**18, tick_spacing=10)
    provider.add_pool(snapshot)

    for moving_up in (True, False):
        assert (
            integrate(
                provider=provider,
                snapshot=snapshot,
                moving_up=moving_up,
                unit=TokenUnit.TOKEN0,
                target_sqrt_price_x96=snapshot.sqrt_price_x96,
            )
            == 0
        )


@hypothesis.settings(
    max_examples=50,
    deadline=None,
    suppress_health_check=[hypothesis.HealthCheck.function_scoped_fixture],
)
@hypothesis.given(
    tick=hypothesis.strategies.integers(min_value=-50_000, max_value=50_000),
    liquidity=hypothesis.strategies.integers(min_value=1, max_value=2**100),
    target_distance=hypothesis.strategies.integers(min_value=1, max_value=2_000),
    moving_up=hypothesis.strategies.booleans(),
    unit=hypothesis.strategies.sampled_from(TokenUnit),
)
def test_single_interval_matches_amount_delta(
    make_snapshot,
    tick: int,
    liquidity: int,
    target_distance: int,
    moving_up: bool,  # noqa: FBT001
    unit: TokenUnit,
):
    # No initialized ticks, so the whole walk happens at the snapshot liquidity
    provider = InMemoryPoolStateProvider()
    snapshot = make_snapshot(tick=tick, liquidity=liquidity)
    provider.add_pool(snapshot)

    target = get_sqrt_ratio_at_tick(tick + target_distance if moving_up else tick - target_distance)
    expected = (get_amount0_delta if unit is TokenUnit.TOKEN0 else get_amount1_delta)(
        snapshot.sqrt_price_x96, target, liquidity
    )

    assert (
        integrate(
            provider=provider,
            snapshot=snapshot,
            moving_up=moving_up,
            unit=unit,
            target_sqrt_price_x96=target,
        )
        == expected
    )


def test_crossing_upward_applies_liquidity_delta(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=1_000, tick_spacing=10)
    provider.add_pool(snapshot)
    provider.set_liquidity_delta(snapshot.address, 120, -500)

    price_100 = get_sqrt_ratio_at_tick(100)
    price_120 = get_sqrt_ratio_at_tick(120)
    price_140 = get_sqrt_ratio_at_tick(140)

    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN0,
        target_sqrt_price_x96=price_140,
    ) == get_amount0_delta(price_100, price_120, 1_000) + get_amount0_delta(
        price_120, price_140, 500
    )

    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN1,
        target_sqrt_price_x96=price_140,
    ) == get_amount1_delta(price_100, price_120, 1_000) + get_amount1_delta(
        price_120, price_140, 500
    )


def test_target_before_first_tick_stays_in_one_interval(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=1_000, tick_spacing=10)
    provider.add_pool(snapshot)
    provider.set_liquidity_delta(snapshot.address, 120, -500)

    target = get_sqrt_ratio_at_tick(115)

    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN0,
        target_sqrt_price_x96=target,
    ) == get_amount0_delta(snapshot.sqrt_price_x96, target, 1_000)


@pytest.mark.parametrize("unit", list(TokenUnit))
@pytest.mark.parametrize("liquidity_net", [400, -400])
@pytest.mark.parametrize(("moving_up", "boundary"), [(True, 140), (False, 60)])
def test_boundary_at_target_does_not_change_amount(
    provider,
    make_snapshot,
    unit: TokenUnit,
    liquidity_net: int,
    moving_up: bool,  # noqa: FBT001
    boundary: int,
):
    snapshot = make_snapshot(tick=100, liquidity=1_000, tick_spacing=10)
    provider.add_pool(snapshot)
    # the only initialized tick sits exactly on the target, so it is crossed after the last interval
    provider.set_liquidity_delta(snapshot.address, boundary, liquidity_net)

    target = get_sqrt_ratio_at_tick(boundary)
    expected = (get_amount0_delta if unit is TokenUnit.TOKEN0 else get_amount1_delta)(
        snapshot.sqrt_price_x96, target, 1_000
    )

    assert (
        integrate(
            provider=provider,
            snapshot=snapshot,
            moving_up=moving_up,
            unit=unit,
            target_sqrt_price_x96=target,
        )
        == expected
    )
    assert expected > 0


def test_crossing_downward_negates_liquidity_delta(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=1_000, tick_spacing=10)
    provider.add_pool(snapshot)
    # entering [80, ...) from below added 400, so leaving it downward removes 400
    provider.set_liquidity_delta(snapshot.address, 80, 400)

    price_100 = get_sqrt_ratio_at_tick(100)
    price_80 = get_sqrt_ratio_at_tick(80)
    price_60 = get_sqrt_ratio_at_tick(60)

    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=False,
        unit=TokenUnit.TOKEN1,
        target_sqrt_price_x96=price_60,
    ) == get_amount1_delta(price_100, price_80, 1_000) + get_amount1_delta(price_80, price_60, 600)


def test_walk_through_positions(provider, make_snapshot):
    snapshot = make_snapshot(tick=0, liquidity=0, tick_spacing=60)
    provider.add_pool(snapshot)
    provider.add_position(snapshot.address, -600, 600, 10**18)
    provider.add_position(snapshot.address, -120, 120, 10**18)
    provider.add_position(snapshot.address, 300, 900, 10**17)

    snapshot = provider.get_snapshot(snapshot.address)
    assert snapshot.liquidity == 2 * 10**18

    price = {tick: get_sqrt_ratio_at_tick(tick) for tick in (-600, -120, 0, 120, 300, 600, 700)}

    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN1,
        target_sqrt_price_x96=price[700],
    ) == (
        get_amount1_delta(price[0], price[120], 2 * 10**18)
        + get_amount1_delta(price[120], price[300], 10**18)
        + get_amount1_delta(price[300], price[600], 10**18 + 10**17)
        + get_amount1_delta(price[600], price[700], 10**17)
    )

    # the price rests exactly on tick 0, which is not initialized, so nothing is crossed there
    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=False,
        unit=TokenUnit.TOKEN0,
        target_sqrt_price_x96=get_sqrt_ratio_at_tick(-700),
    ) == (
        get_amount0_delta(price[0], price[-120], 2 * 10**18)
        + get_amount0_delta(price[-120], price[-600], 10**18)
    )


def test_inconsistent_delta_saturates_at_zero(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=100, tick_spacing=10)
    provider.add_pool(snapshot)
    provider.set_liquidity_delta(snapshot.address, 120, -500)

    price_140 = get_sqrt_ratio_at_tick(140)

    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN0,
        target_sqrt_price_x96=price_140,
    ) == get_amount0_delta(snapshot.sqrt_price_x96, get_sqrt_ratio_at_tick(120), 100)


def test_snapshot_is_not_modified(provider, make_snapshot):
    snapshot = make_snapshot(tick=100, liquidity=1_000, tick_spacing=10)
    provider.add_pool(snapshot)
    provider.set_liquidity_delta(snapshot.address, 120, -500)
    original = snapshot.model_copy()

    integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN0,
        target_sqrt_price_x96=get_sqrt_ratio_at_tick(200),
    )

    assert snapshot == original


def test_walk_ends_at_price_bounds(provider, make_snapshot):
    snapshot = make_snapshot(tick=887_000, liquidity=10**10, tick_spacing=1)
    provider.add_pool(snapshot)

    target = MAX_SQRT_RATIO - 1
    assert integrate(
        provider=provider,
        snapshot=snapshot,
        moving_up=True,
        unit=TokenUnit.TOKEN1,
        target_sqrt_price_x96=target,
    ) == get_amount1_delta(snapshot.sqrt_price_x96, target, 10**10)


def test_search_word_limit(provider, make_snapshot):
    snapshot = make_snapshot(tick=0, liquidity=1_000, tick_spacing=1)
    provider.add_pool(snapshot)

    with pytest.raises(SearchIterationLimitExceeded):
        integrate(
            provider=provider,
            snapshot=snapshot,
            moving_up=True,
            unit=TokenUnit.TOKEN0,
            target_sqrt_price_x96=get_sqrt_ratio_at_tick(100_000),
            max_search_words=5,
        )
