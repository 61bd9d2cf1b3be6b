# File: src/blockinsight/explorer/api.py
import logging
from typing import Optional

from .cache import ConfirmationCache
from .listing import ListingPaginator
from .models import BlockDetail, BlockIndex, BlockList, RawBlock
from .pools import PoolAttributor
from .summary import SummaryBuilder
from .transformer import BlockTransformer
from ..exceptions import BlockNotFoundError
from ..node.interfaces import NodeService, TransactionService
from ..utils.config import Config

logger = logging.getLogger(__name__)


class ExplorerAPI:
    def __init__(
        self,
        node: NodeService,
        transactions: TransactionService,
        pools: PoolAttributor,
        cache: Optional[ConfirmationCache] = None,
        block_limit: int = Config.BLOCK_LIMIT
    ):
        self.node = node
        self.transactions = transactions
        self.cache = cache or ConfirmationCache()
        self.transformer = BlockTransformer(pools, self.cache)
        self.summaries = SummaryBuilder(node, transactions, pools, self.cache)
        self.listing = ListingPaginator(node, self.summaries, default_limit=block_limit)

    async def get_block(self, block_hash: str) -> Optional[BlockDetail]:
        """Get block detail by hash, or None if the node does not know it."""
        if self.cache.has_block(block_hash):
            cached = self.cache.get_block(block_hash, await self.node.get_tip_height())
            if cached is not None:
                return cached

        try:
            block = await self.node.get_block(block_hash)
        except BlockNotFoundError:
            logger.info(f"Block not found: {block_hash}")
            return None

        info = await self.node.get_block_header(block_hash)
        coinbase = None
        if block.transaction_ids:
            coinbase = await self.transactions.get_detailed_transaction(block.transaction_ids[0])
        return self.transformer.transform(block, info, coinbase)

    async def get_raw_block(self, block_hash: str) -> Optional[RawBlock]:
        """Get serialized block as hex."""
        try:
            raw = await self.node.get_raw_block(block_hash)
        except BlockNotFoundError:
            return None
        return RawBlock(rawblock=raw.hex())

    async def get_block_index(self, height: int) -> Optional[BlockIndex]:
        """Get block hash at a height."""
        try:
            info = await self.node.get_block_header(height)
        except BlockNotFoundError:
            return None
        return BlockIndex(blockHash=info.hash)

    async def list_blocks(
        self,
        block_date: Optional[str] = None,
        start_timestamp: Optional[int] = None,
        limit: Optional[int] = None
    ) -> BlockList:
        """List block summaries for a UTC day."""
        return await self.listing.list_blocks(block_date, start_timestamp, limit)
