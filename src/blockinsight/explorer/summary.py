# src/blockinsight/explorer/summary.py
import logging
from typing import Optional

from .cache import ConfirmationCache
from .models import BlockSummary
from .pools import PoolAttributor
from ..blockchain.encoding import parse_block
from ..blockchain.reward import get_block_reward
from ..monitoring.metrics import summary_build_time
from ..node.interfaces import NodeService, TransactionService

logger = logging.getLogger(__name__)


class SummaryBuilder:
    """Builds lightweight block summaries for listings"""

    def __init__(
        self,
        node: NodeService,
        transactions: TransactionService,
        pools: PoolAttributor,
        cache: ConfirmationCache
    ):
        self.node = node
        self.transactions = transactions
        self.pools = pools
        self.cache = cache

    async def build(self, block_hash: str, tip_height: Optional[int] = None) -> BlockSummary:
        """
        Summary for one block. `tip_height` is only used to decide cache
        admission; it is read from the node when not supplied.
        """
        cached = self.cache.get_summary(block_hash)
        if cached is not None:
            return cached

        with summary_build_time.time():
            summary, confirmations = await self._build_from_node(block_hash, tip_height)

        self.cache.put_summary(block_hash, summary, confirmations)
        return summary

    async def _build_from_node(self, block_hash: str, tip_height: Optional[int]):
        raw = await self.node.get_raw_block(block_hash)
        block = parse_block(raw)

        # Output addresses need the node's script decoding, so the coinbase
        # is resolved through the transaction service rather than the raw bytes.
        txids = await self.node.get_block_transaction_ids(block_hash)
        coinbase = await self.transactions.get_detailed_transaction(txids[0])
        info = await self.node.get_block_header(block_hash)

        reward = get_block_reward(info.height)
        pool_info, mined_by = self.pools.attribute(block.coinbase_script, coinbase.outputs, reward)

        summary = BlockSummary(
            height=info.height,
            size=block.size,
            hash=block_hash,
            time=block.header.time,
            txlength=block.transaction_count,
            poolInfo=pool_info,
            minedBy=mined_by
        )

        if tip_height is None:
            tip_height = await self.node.get_tip_height()
        return summary, tip_height - info.height + 1
