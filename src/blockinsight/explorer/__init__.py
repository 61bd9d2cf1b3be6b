from .api import ExplorerAPI
from .cache import ConfirmationCache, LRUCache
from .listing import ListingPaginator
from .models import BlockDetail, BlockIndex, BlockList, BlockSummary, PaginationCursor, PoolInfo, RawBlock
from .pools import PoolAttributor
from .summary import SummaryBuilder
from .transformer import BlockTransformer

__all__ = [
    'ExplorerAPI',
    'ConfirmationCache',
    'LRUCache',
    'ListingPaginator',
    'BlockDetail',
    'BlockIndex',
    'BlockList',
    'BlockSummary',
    'PaginationCursor',
    'PoolInfo',
    'RawBlock',
    'PoolAttributor',
    'SummaryBuilder',
    'BlockTransformer',
]
