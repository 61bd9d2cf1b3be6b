# src/blockinsight/blockchain/reward.py
from ..utils.config import Config


def get_block_reward(height: int) -> int:
    """
    Block subsidy in base units for the given height.

    The first SLOW_START_INTERVAL blocks ramp the subsidy up linearly,
    skipping the middle payout of MAX_BLOCK_SUBSIDY / 2 so the monetary
    curve matches a chain without slow start. After that the subsidy is
    halved every HALVING_INTERVAL blocks, counted from the ramp midpoint.
    """
    if height < 0:
        raise ValueError(f"Block height must be non-negative, got {height}")

    subsidy = Config.MAX_BLOCK_SUBSIDY
    step = subsidy // Config.SLOW_START_INTERVAL

    if height < Config.SLOW_START_SHIFT:
        return step * height
    elif height < Config.SLOW_START_INTERVAL:
        return step * (height + 1)

    halvings = (height - Config.SLOW_START_SHIFT) // Config.HALVING_INTERVAL
    # A shift of 64 bits or more zeroes the reward
    if halvings >= Config.MAX_HALVINGS:
        return 0

    return subsidy >> halvings
