# src/blockinsight/node/interfaces.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..blockchain.block import Block


@dataclass(frozen=True)
class BlockHeaderInfo:
    """Chain context the node keeps for a block header"""
    hash: str
    height: int
    confirmations: int
    chainwork: Optional[str] = None
    next_hash: Optional[str] = None


@dataclass(frozen=True)
class TransactionOutput:
    satoshis: int
    address: Optional[str] = None


@dataclass(frozen=True)
class DetailedTransaction:
    hash: str
    outputs: List[TransactionOutput] = field(default_factory=list)


class NodeService(ABC):
    """
    Blocks, headers and the timestamp index served by the node.

    Implementations raise BlockNotFoundError when the node reports an
    unknown hash or height and CollaboratorError for any other failure.
    """

    @abstractmethod
    async def get_tip_height(self) -> int:
        """Height of the current best block"""

    @abstractmethod
    async def get_block(self, block_hash: str) -> Block:
        """Decoded block including every transaction id"""

    @abstractmethod
    async def get_raw_block(self, block_hash: str) -> bytes:
        """Serialized block bytes"""

    @abstractmethod
    async def get_block_header(self, hash_or_height: Union[str, int]) -> BlockHeaderInfo:
        """Header chain context by hash or height"""

    @abstractmethod
    async def get_block_hashes_by_timestamp(self, high: int, low: int) -> List[str]:
        """Hashes of blocks with low <= time < high, oldest first"""

    @abstractmethod
    async def get_block_transaction_ids(self, block_hash: str) -> List[str]:
        """Transaction ids of a block in block order"""


class TransactionService(ABC):
    """Resolves transaction ids into outputs with amounts and addresses"""

    @abstractmethod
    async def get_detailed_transaction(self, txid: str) -> DetailedTransaction:
        """Transaction with resolved outputs"""
