from collections.abc import Iterable, Sequence

from eth_typing import ChecksumAddress

from pooldepth.config import settings
from pooldepth.depth.target import get_target_sqrt_price
from pooldepth.depth.types import DepthConfig, DepthRequest, PoolSnapshot
from pooldepth.depth.walker import integrate
from pooldepth.exceptions import BatchLengthMismatch
from pooldepth.logging import logger
from pooldepth.types.abstract import AbstractPoolStateProvider


class BatchEstimator:
    """
    Estimate depth for a batch of requests against a pool state provider.

    Pool state is read once for each contiguous run of requests sharing a pool, so ordering
    requests by pool reduces provider reads without changing any result.
    """

    def __init__(
        self,
        provider: AbstractPoolStateProvider,
        max_search_words: int | None = None,
    ) -> None:
        self.provider = provider
        self.max_search_words = (
            max_search_words if max_search_words is not None else settings.depth.max_search_words
        )

    def estimate(
        self,
        pools: Sequence[ChecksumAddress | str],
        offsets: Sequence[int],
        configs: Sequence[DepthConfig],
    ) -> list[int]:
        """
        Estimate the depth for each (pool, offset, config) triple from the parallel sequences. The
        amounts are returned in input order.
        """

        if not (len(pools) == len(offsets) == len(configs)):
            raise BatchLengthMismatch(
                pools=len(pools),
                offsets=len(offsets),
                configs=len(configs),
            )

        return self.estimate_requests(
            [
                DepthRequest(pool=pool, offset=offset, config=config)
                for pool, offset, config in zip(pools, offsets, configs, strict=True)
            ]
        )

    def estimate_requests(self, requests: Iterable[DepthRequest]) -> list[int]:
        loaded_pool: ChecksumAddress | None = None
        snapshot: PoolSnapshot | None = None

        amounts: list[int] = []
        for request in requests:
            if snapshot is None or request.pool != loaded_pool:
                snapshot = self.provider.get_snapshot(request.pool)
                loaded_pool = request.pool
                logger.debug(
                    f"Loaded snapshot for {loaded_pool}: price={snapshot.sqrt_price_x96}, "
                    f"tick={snapshot.tick}, liquidity={snapshot.liquidity}"
                )
            amounts.append(self._estimate_one(snapshot, request))

        return amounts

    def _estimate_one(self, snapshot: PoolSnapshot, request: DepthRequest) -> int:
        # Both directions start from the unmodified snapshot
        return sum(
            integrate(
                provider=self.provider,
                snapshot=snapshot,
                moving_up=moving_up,
                unit=request.config.unit,
                target_sqrt_price_x96=get_target_sqrt_price(
                    sqrt_price_x96=snapshot.sqrt_price_x96,
                    offset=request.offset,
                    moving_up=moving_up,
                ),
                max_search_words=self.max_search_words,
            )
            for moving_up in request.config.side.directions
        )


def estimate(
    provider: AbstractPoolStateProvider,
    pools: Sequence[ChecksumAddress | str],
    offsets: Sequence[int],
    configs: Sequence[DepthConfig],
) -> list[int]:
    return BatchEstimator(provider).estimate(pools, offsets, configs)
