from pooldepth.constants import MAX_UINT256, MIN_UINT256
from pooldepth.exceptions import EVMRevertError

# Bit scans over a uint256 bitmap word, equivalent to the Uniswap V3 BitMath.sol library.
# Reference: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/BitMath.sol


def _check_uint256_nonzero(number: int) -> None:
    if number <= MIN_UINT256:
        raise EVMRevertError(error="required: number > 0")
    if number > MAX_UINT256:
        raise EVMRevertError(error="required: number <= max(uint256)")


def least_significant_bit(number: int) -> int:
    """
    Find the least significant bit for the given number.

    `number & -number` isolates the lowest set bit, and its bit length is one past that bit's index.
    """

    _check_uint256_nonzero(number)
    return (number & -number).bit_length() - 1


def most_significant_bit(number: int) -> int:
    """
    Find the most significant bit for the given number.
    """

    _check_uint256_nonzero(number)
    return number.bit_length() - 1
