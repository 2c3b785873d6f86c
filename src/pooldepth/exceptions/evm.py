from pooldepth.exceptions.base import PooldepthError


class EVMRevertError(PooldepthError):
    """
    Raised when a simulated EVM math operation would revert.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"EVM Revert: {error}")
