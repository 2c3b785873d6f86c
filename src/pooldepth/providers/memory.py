import dataclasses

from eth_typing import ChecksumAddress

from pooldepth.constants import MAX_INT128, MIN_INT128
from pooldepth.depth.types import PoolSnapshot
from pooldepth.exceptions import PooldepthValueError, UnknownPool
from pooldepth.functions import get_checksum_address
from pooldepth.libraries.liquidity_math import add_delta
from pooldepth.libraries.tick_bitmap import set_tick_initialized
from pooldepth.types.abstract import AbstractPoolStateProvider
from pooldepth.types.aliases import BitmapWord, LiquidityNet, Tick, Word


@dataclasses.dataclass(slots=True)
class _PoolRecord:
    snapshot: PoolSnapshot
    tick_bitmap: dict[Word, BitmapWord] = dataclasses.field(default_factory=dict)
    tick_data: dict[Tick, LiquidityNet] = dataclasses.field(default_factory=dict)


class InMemoryPoolStateProvider(AbstractPoolStateProvider):
    """
    Pool state held in memory. The tick bitmap is maintained alongside the liquidity deltas so that
    a bit is set exactly when its tick carries a non-zero delta.
    """

    def __init__(self) -> None:
        self._pools: dict[ChecksumAddress, _PoolRecord] = {}

    def _record(self, pool: ChecksumAddress | str) -> _PoolRecord:
        try:
            return self._pools[get_checksum_address(pool)]
        except KeyError:
            raise UnknownPool(pool=get_checksum_address(pool)) from None

    def add_pool(self, snapshot: PoolSnapshot) -> None:
        self._pools[snapshot.address] = _PoolRecord(snapshot=snapshot)

    def set_liquidity_delta(
        self,
        pool: ChecksumAddress | str,
        tick: Tick,
        liquidity_net: LiquidityNet,
    ) -> None:
        """
        Record the liquidity delta at a tick, replacing any previous value. A zero delta clears the
        tick.
        """

        record = self._record(pool)

        if not (MIN_INT128 <= liquidity_net <= MAX_INT128):
            raise PooldepthValueError(message=f"Liquidity delta {liquidity_net} is not an int128.")

        set_tick_initialized(
            tick_bitmap=record.tick_bitmap,
            tick=tick,
            tick_spacing=record.snapshot.tick_spacing,
            initialized=liquidity_net != 0,
        )
        if liquidity_net == 0:
            record.tick_data.pop(tick, None)
        else:
            record.tick_data[tick] = liquidity_net

    def add_position(
        self,
        pool: ChecksumAddress | str,
        tick_lower: Tick,
        tick_upper: Tick,
        liquidity: int,
    ) -> None:
        """
        Add liquidity across a tick range. The delta is added at the lower tick and removed at the
        upper tick, and the active liquidity is adjusted when the range contains the current tick.
        """

        if tick_lower >= tick_upper:
            raise PooldepthValueError(message=f"Invalid tick range [{tick_lower}, {tick_upper}).")

        record = self._record(pool)
        self.set_liquidity_delta(pool, tick_lower, record.tick_data.get(tick_lower, 0) + liquidity)
        self.set_liquidity_delta(pool, tick_upper, record.tick_data.get(tick_upper, 0) - liquidity)

        snapshot = record.snapshot
        if tick_lower <= snapshot.tick < tick_upper:
            record.snapshot = snapshot.model_copy(
                update={"liquidity": add_delta(snapshot.liquidity, liquidity)}
            )

    def get_snapshot(self, pool: ChecksumAddress) -> PoolSnapshot:
        return self._record(pool).snapshot

    def get_boundary_word(self, pool: ChecksumAddress, word: Word) -> BitmapWord:
        return self._record(pool).tick_bitmap.get(word, 0)

    def get_liquidity_delta(self, pool: ChecksumAddress, tick: Tick) -> LiquidityNet:
        return self._record(pool).tick_data.get(tick, 0)
