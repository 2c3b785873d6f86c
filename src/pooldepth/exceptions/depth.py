from typing import Any

from pooldepth.exceptions.base import PooldepthError


class DepthEstimationError(PooldepthError):
    """
    Exception raised inside the depth walker and batch estimator.
    """


class BatchLengthMismatch(DepthEstimationError):
    """
    Raised when the parallel input sequences of a batch do not share a common length. No pool state
    is read and no amount is computed for any element.
    """

    def __init__(self, pools: int, offsets: int, configs: int) -> None:
        self.pools = pools
        self.offsets = offsets
        self.configs = configs
        super().__init__(
            message=f"Batch inputs have mismatched lengths: {pools} pools, {offsets} offsets, "
            f"{configs} configs."
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.pools, self.offsets, self.configs)


class SearchIterationLimitExceeded(DepthEstimationError):
    """
    Raised when the search for the next initialized tick reads more bitmap words than allowed.
    Honest pool state never needs more words than the tick range spans, so this indicates
    inconsistent boundary data.
    """

    def __init__(self, words: int) -> None:
        self.words = words
        super().__init__(message=f"Tick search exceeded the limit of {words} bitmap words.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.words,)
