# src/blockinsight/blockchain/block.py
from typing import Tuple
from dataclasses import dataclass, field

from ..utils.config import Config


def bits_to_target(bits: int) -> int:
    """Expand compact difficulty bits into the full 256-bit target"""
    exponent = bits >> 24
    mantissa = bits & 0xffffff
    if exponent <= 3:
        return mantissa >> (8 * (3 - exponent))
    return mantissa << (8 * (exponent - 3))


@dataclass(frozen=True)
class BlockHeader:
    """Equihash block header as found on the wire"""
    version: int
    prev_hash: str
    merkle_root: str
    reserved: str
    time: int
    bits: int
    nonce: str
    solution: str
    hash: str

    def get_difficulty(self) -> float:
        """Difficulty relative to the genesis target, with eight decimals of precision"""
        target = bits_to_target(self.bits)
        if target == 0:
            return 0.0
        scaled = bits_to_target(Config.GENESIS_BITS) * 10**8 // target
        return scaled / 10**8

    @property
    def bits_hex(self) -> str:
        return format(self.bits, 'x')


@dataclass(frozen=True)
class Block:
    """
    Block as decoded by the explorer.

    Only the header, the transaction count and the coinbase input script
    are decoded from the raw bytes; transaction ids are supplied by the
    node when it has them.
    """
    header: BlockHeader
    size: int
    transaction_count: int
    coinbase_script: bytes
    transaction_ids: Tuple[str, ...] = field(default=())

    @property
    def hash(self) -> str:
        return self.header.hash

    def with_transaction_ids(self, transaction_ids) -> 'Block':
        return Block(
            header=self.header,
            size=self.size,
            transaction_count=self.transaction_count,
            coinbase_script=self.coinbase_script,
            transaction_ids=tuple(transaction_ids)
        )

    def __str__(self) -> str:
        return (
            f"Block(hash={self.hash[:8]}..., "
            f"tx_count={self.transaction_count}, "
            f"size={self.size})"
        )
