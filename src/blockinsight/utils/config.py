# src/blockinsight/utils/config.py

class Config:
    # Block subsidy schedule (base units, 1e8 per coin)
    COIN = 100_000_000
    MAX_BLOCK_SUBSIDY = 20 * COIN
    SLOW_START_INTERVAL = 4000
    SLOW_START_SHIFT = SLOW_START_INTERVAL // 2
    HALVING_INTERVAL = 2_102_400
    MAX_HALVINGS = 64

    # Blocks this deep are treated as final and may be cached
    BLOCK_CACHE_CONFIRMATIONS = 6
    DEFAULT_BLOCK_CACHE_SIZE = 1000
    DEFAULT_BLOCK_SUMMARY_CACHE_SIZE = 1_000_000

    # Listing
    BLOCK_LIMIT = 200
    SECONDS_PER_DAY = 86400
    DATE_FORMAT = "%Y-%m-%d"

    # Header encoding
    NULL_HASH = "0" * 64
    GENESIS_BITS = 0x1f07ffff

    # Node RPC codes meaning "not found" (invalid address/key, invalid parameter)
    NOT_FOUND_CODES = (-5, -8)
