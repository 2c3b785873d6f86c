import dataclasses
import enum
from typing import Any

import pydantic
from eth_typing import ChecksumAddress

from pooldepth.functions import get_checksum_address
from pooldepth.validation.evm_values import (
    ValidatedInt24,
    ValidatedInt24Positive,
    ValidatedUint128,
    ValidatedUint160,
    ValidatedUint160NonZero,
)


class Side(enum.Enum):
    """
    The direction(s) of price movement to integrate over.
    """

    UPPER = "upper"
    LOWER = "lower"
    BOTH = "both"

    @property
    def directions(self) -> tuple[bool, ...]:
        """
        The `moving_up` flags to walk for this side.
        """

        match self:
            case Side.UPPER:
                return (True,)
            case Side.LOWER:
                return (False,)
            case Side.BOTH:
                return (True, False)


class TokenUnit(enum.Enum):
    TOKEN0 = "token0"
    TOKEN1 = "token1"


def _checksum_pool_address(value: Any) -> Any:
    return get_checksum_address(value) if isinstance(value, (str, bytes)) else value


class PoolSnapshot(pydantic.BaseModel, frozen=True):
    """
    The state of a pool read once and shared by every estimate in a contiguous run of requests for
    that pool. Walkers copy the values they advance and never modify the snapshot.
    """

    address: ChecksumAddress
    sqrt_price_x96: ValidatedUint160NonZero
    tick: ValidatedInt24
    liquidity: ValidatedUint128
    tick_spacing: ValidatedInt24Positive

    @pydantic.field_validator("address", mode="before")
    @classmethod
    def checksum_address(cls, value: Any) -> Any:
        return _checksum_pool_address(value)


@dataclasses.dataclass(slots=True, frozen=True)
class DepthConfig:
    side: Side = Side.BOTH
    unit: TokenUnit = TokenUnit.TOKEN0


class DepthRequest(pydantic.BaseModel, frozen=True):
    """
    A request for the amount needed to move a pool's square root price by `offset`, expressed in the
    same Q64.96 units as the price.
    """

    pool: ChecksumAddress
    offset: ValidatedUint160
    config: DepthConfig = DepthConfig()

    @pydantic.field_validator("pool", mode="before")
    @classmethod
    def checksum_pool(cls, value: Any) -> Any:
        return _checksum_pool_address(value)
