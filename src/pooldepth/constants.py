"""
Bounds of the fixed-width EVM integer types that pool state is stored in.
"""

MIN_INT24 = -(2**23)
MAX_INT24 = 2**23 - 1

MIN_INT128 = -(2**127)
MAX_INT128 = 2**127 - 1

MAX_UINT8 = 2**8 - 1

MIN_UINT128 = 0
MAX_UINT128 = 2**128 - 1

MIN_UINT160 = 0
MAX_UINT160 = 2**160 - 1

MIN_UINT256 = 0
MAX_UINT256 = 2**256 - 1

# Ticks tracked by one word of the initialization bitmap
TICKS_PER_WORD = 256
