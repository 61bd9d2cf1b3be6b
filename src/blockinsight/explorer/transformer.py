# src/blockinsight/explorer/transformer.py
import logging
from typing import Optional

from .cache import ConfirmationCache
from .models import BlockDetail
from .pools import PoolAttributor
from ..blockchain.block import Block
from ..blockchain.reward import get_block_reward
from ..node.interfaces import BlockHeaderInfo, DetailedTransaction
from ..utils.config import Config

logger = logging.getLogger(__name__)


def normalize_prev_hash(prev_hash: str) -> Optional[str]:
    """The genesis block links to the all-zero hash; render that as null"""
    if prev_hash == Config.NULL_HASH:
        return None
    return prev_hash


class BlockTransformer:
    def __init__(self, pools: PoolAttributor, cache: Optional[ConfirmationCache] = None):
        self.pools = pools
        self.cache = cache

    def transform(
        self,
        block: Block,
        info: BlockHeaderInfo,
        coinbase: Optional[DetailedTransaction]
    ) -> BlockDetail:
        """Build the block detail record and cache it once it is deep enough"""
        header = block.header
        reward = get_block_reward(info.height)
        outputs = coinbase.outputs if coinbase else []
        pool_info, mined_by = self.pools.attribute(block.coinbase_script, outputs, reward)

        detail = BlockDetail(
            hash=block.hash,
            size=block.size,
            height=info.height,
            version=header.version,
            merkleroot=header.merkle_root,
            tx=list(block.transaction_ids),
            time=header.time,
            nonce=header.nonce,
            solution=header.solution,
            bits=header.bits_hex,
            difficulty=header.get_difficulty(),
            chainwork=info.chainwork,
            confirmations=info.confirmations,
            previousblockhash=normalize_prev_hash(header.prev_hash),
            nextblockhash=info.next_hash,
            reward=reward / Config.COIN,
            minedBy=mined_by,
            isMainChain=info.confirmations != -1,
            poolInfo=pool_info
        )

        if self.cache is not None:
            self.cache.put_block(detail.hash, detail, detail.confirmations)
        return detail
