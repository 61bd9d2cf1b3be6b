from .interfaces import (
    BlockHeaderInfo,
    DetailedTransaction,
    NodeService,
    TransactionOutput,
    TransactionService,
)

__all__ = [
    'BlockHeaderInfo',
    'DetailedTransaction',
    'NodeService',
    'TransactionOutput',
    'TransactionService',
]
