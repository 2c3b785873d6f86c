import abc
from typing import TYPE_CHECKING

from eth_typing import ChecksumAddress

from pooldepth.types.aliases import BitmapWord, LiquidityNet, Tick, Word

if TYPE_CHECKING:
    from pooldepth.depth.types import PoolSnapshot


class AbstractPoolStateProvider(abc.ABC):
    """
    Read-only source of concentrated liquidity pool state.

    Reads must be idempotent for the lifetime of a single estimate: the walker may request the same
    word or tick more than once and expects the same answer each time.
    """

    @abc.abstractmethod
    def get_snapshot(self, pool: ChecksumAddress) -> "PoolSnapshot":
        """
        Return the current price, tick, active liquidity and tick spacing for the pool.
        """

    @abc.abstractmethod
    def get_boundary_word(self, pool: ChecksumAddress, word: Word) -> BitmapWord:
        """
        Return the 256-bit initialization bitmap at the word position. Words with no initialized
        ticks are returned as 0.
        """

    @abc.abstractmethod
    def get_liquidity_delta(self, pool: ChecksumAddress, tick: Tick) -> LiquidityNet:
        """
        Return the signed change in active liquidity when the price crosses the tick moving upward.
        Uninitialized ticks are returned as 0.
        """
