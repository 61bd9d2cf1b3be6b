from .reward import get_block_reward
from .block import Block, BlockHeader
from .encoding import BufferReader, parse_block

__all__ = ['get_block_reward', 'Block', 'BlockHeader', 'BufferReader', 'parse_block']
