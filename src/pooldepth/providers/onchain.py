from typing import Any, cast

from eth_abi.exceptions import DecodingError
from eth_typing import ChecksumAddress
from requests.exceptions import RequestException
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter
from web3 import Web3
from web3.exceptions import ContractLogicError

from pooldepth.config import settings
from pooldepth.depth.types import PoolSnapshot
from pooldepth.exceptions import PoolStateFetchingError
from pooldepth.functions import encode_function_calldata, get_checksum_address, raw_call
from pooldepth.logging import logger
from pooldepth.types.abstract import AbstractPoolStateProvider
from pooldepth.types.aliases import BitmapWord, BlockNumber, LiquidityNet, Tick, Word


class UniswapV3PoolStateProvider(AbstractPoolStateProvider):
    """
    Reads Uniswap V3 pool state through `eth_call`.

    Every read is made at a single block so that the snapshot, bitmap words and tick deltas are
    consistent with each other. If no block is given, the chain head at the first read is used.
    Bitmap words and tick deltas are memoized for the lifetime of the provider.
    """

    SLOT0_STRUCT_TYPES = (
        "uint160",  # sqrtPriceX96
        "int24",  # tick
        "uint16",  # observationIndex
        "uint16",  # observationCardinality
        "uint16",  # observationCardinalityNext
        "uint8",  # feeProtocol
        "bool",  # unlocked
    )
    TICK_STRUCT_TYPES = (
        "uint128",  # liquidityGross
        "int128",  # liquidityNet
        "uint256",  # feeGrowthOutside0X128
        "uint256",  # feeGrowthOutside1X128
        "int56",  # tickCumulativeOutside
        "uint160",  # secondsPerLiquidityOutsideX128
        "uint32",  # secondsOutside
        "bool",  # initialized
    )

    def __init__(
        self,
        w3: Web3,
        block_number: BlockNumber | None = None,
        rpc_retries: int | None = None,
    ) -> None:
        self.w3 = w3
        self._block_number = block_number
        self._retrier = Retrying(
            stop=stop_after_attempt(
                rpc_retries if rpc_retries is not None else settings.fetching.rpc_retries
            ),
            wait=wait_exponential_jitter(max=10.0),
            retry=retry_if_exception_type((RequestException, TimeoutError)),
            reraise=True,
        )
        self._tick_bitmap: dict[tuple[ChecksumAddress, Word], BitmapWord] = {}
        self._tick_data: dict[tuple[ChecksumAddress, Tick], LiquidityNet] = {}

    @property
    def block_number(self) -> BlockNumber:
        if self._block_number is None:
            self._block_number = cast("int", self.w3.eth.block_number)
            logger.debug(f"Pinned pool state reads to block {self._block_number}")
        return self._block_number

    def _call(
        self,
        pool: ChecksumAddress,
        function_prototype: str,
        function_arguments: list[Any] | None,
        return_types: list[str],
    ) -> tuple[Any, ...]:
        try:
            return self._retrier(
                raw_call,
                w3=self.w3,
                address=get_checksum_address(pool),
                calldata=encode_function_calldata(
                    function_prototype=function_prototype,
                    function_arguments=function_arguments,
                ),
                return_types=return_types,
                block_identifier=self.block_number,
            )
        except (ContractLogicError, DecodingError) as exc:
            # Contracts differ slightly across Uniswap V3 forks, so decoding may fail. Catch this
            # here and raise as a provider-specific exception
            raise PoolStateFetchingError(
                message=f"Could not read {function_prototype} from {pool}"
            ) from exc

    def get_snapshot(self, pool: ChecksumAddress) -> PoolSnapshot:
        sqrt_price_x96, tick, *_ = self._call(
            pool,
            "slot0()",
            None,
            list(self.SLOT0_STRUCT_TYPES),
        )
        (liquidity,) = self._call(pool, "liquidity()", None, ["uint128"])
        (tick_spacing,) = self._call(pool, "tickSpacing()", None, ["int24"])

        return PoolSnapshot(
            address=pool,
            sqrt_price_x96=sqrt_price_x96,
            tick=tick,
            liquidity=liquidity,
            tick_spacing=tick_spacing,
        )

    def get_boundary_word(self, pool: ChecksumAddress, word: Word) -> BitmapWord:
        key = (get_checksum_address(pool), word)
        if key not in self._tick_bitmap:
            (self._tick_bitmap[key],) = self._call(pool, "tickBitmap(int16)", [word], ["uint256"])
        return self._tick_bitmap[key]

    def get_liquidity_delta(self, pool: ChecksumAddress, tick: Tick) -> LiquidityNet:
        key = (get_checksum_address(pool), tick)
        if key not in self._tick_data:
            _, self._tick_data[key], *_ = self._call(
                pool,
                "ticks(int24)",
                [tick],
                list(self.TICK_STRUCT_TYPES),
            )
        return self._tick_data[key]
