from typing import Any

from eth_typing import ChecksumAddress

from pooldepth.exceptions.base import PooldepthError


class PoolStateError(PooldepthError):
    """
    Exception raised inside pool state providers.
    """


class UnknownPool(PoolStateError):
    """
    The provider holds no state for the requested pool.
    """

    def __init__(self, pool: ChecksumAddress) -> None:
        self.pool = pool
        super().__init__(message=f"No state is known for pool {pool}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.pool,)


class PoolStateFetchingError(PoolStateError):
    """
    Raised when pool state cannot be read from the chain or decoded.
    """
