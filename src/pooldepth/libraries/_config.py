# Maximum entries held by the memoized tick and price math functions
V3_LIB_CACHE_SIZE = 4096
