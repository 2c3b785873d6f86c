from pooldepth.constants import MAX_UINT256, MIN_UINT256
from pooldepth.exceptions import EVMRevertError

"""
512-bit intermediate multiplication and division.

Python integers are unbounded, so the product never overflows here. Only the uint256 bounds on the
operands and on the quotient are enforced, matching where the Solidity library reverts.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/FullMath.sol
"""


def _check_operands(**operands: int) -> None:
    for name, value in operands.items():
        if not (MIN_UINT256 <= value <= MAX_UINT256):
            raise EVMRevertError(error=f"Invalid value for {name}.")


def mulmod(x: int, y: int, k: int) -> int:
    if k == 0:
        raise EVMRevertError(error="division by zero")
    return (x * y) % k


def _muldiv_with_remainder(a: int, b: int, denominator: int) -> tuple[int, int]:
    _check_operands(a=a, b=b, denominator=denominator)
    if denominator == 0:
        raise EVMRevertError(error="DIVISION BY ZERO")

    quotient, remainder = divmod(a * b, denominator)
    if quotient > MAX_UINT256:
        raise EVMRevertError(error="Invalid result, does not fit in uint256")
    return quotient, remainder


def muldiv(a: int, b: int, denominator: int) -> int:
    """
    Calculate floor(a * b / denominator).
    """

    quotient, _ = _muldiv_with_remainder(a, b, denominator)
    return quotient


def muldiv_rounding_up(a: int, b: int, denominator: int) -> int:
    """
    Calculate ceil(a * b / denominator).
    """

    quotient, remainder = _muldiv_with_remainder(a, b, denominator)
    if remainder == 0:
        return quotient
    if quotient == MAX_UINT256:
        raise EVMRevertError(error="Rounded result does not fit in uint256")
    return quotient + 1
