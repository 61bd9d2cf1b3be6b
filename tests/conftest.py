# tests/conftest.py
import hashlib
import struct
from typing import Dict, List, Optional, Union

import pytest

from blockinsight.blockchain.encoding import parse_block
from blockinsight.exceptions import BlockNotFoundError, TransactionNotFoundError
from blockinsight.explorer.cache import ConfirmationCache
from blockinsight.explorer.pools import PoolAttributor
from blockinsight.node.interfaces import (
    BlockHeaderInfo,
    DetailedTransaction,
    NodeService,
    TransactionOutput,
    TransactionService,
)

GENESIS_BITS = 0x1f07ffff

POOLS = [
    {"poolName": "2Miners", "url": "https://2miners.com/", "searchStrings": ["2miners.com"]},
    {"poolName": "LuckPool", "url": "https://luckpool.net/", "searchStrings": ["luckpool", "/LP/"]},
]


def varint(n: int) -> bytes:
    if n < 0xfd:
        return bytes([n])
    if n <= 0xffff:
        return b'\xfd' + struct.pack('<H', n)
    return b'\xfe' + struct.pack('<I', n)


def serialize_header(
    prev_hash: str = "00" * 32,
    time: int = 1704067200,
    bits: int = GENESIS_BITS,
    version: int = 4,
    nonce: bytes = b'\x07' * 32,
    solution: bytes = b'\xab' * 1344
) -> bytes:
    return (
        struct.pack('<i', version)
        + bytes.fromhex(prev_hash)[::-1]
        + hashlib.sha256(b'merkle').digest()
        + b'\x00' * 32
        + struct.pack('<II', time, bits)
        + nonce
        + varint(len(solution)) + solution
    )


def serialize_coinbase(script: bytes, overwintered: bool = True) -> bytes:
    if overwintered:
        tx = struct.pack('<I', 4 | (1 << 31)) + struct.pack('<I', 0x892f2085)
    else:
        tx = struct.pack('<I', 1)
    tx += varint(1) + b'\x00' * 32 + b'\xff\xff\xff\xff'
    tx += varint(len(script)) + script + b'\xff\xff\xff\xff'
    # One output, then lock time and expiry; never read by the explorer
    tx += varint(1) + struct.pack('<q', 1000) + varint(1) + b'\x51'
    tx += b'\x00' * 8
    return tx


def build_raw_block(
    coinbase_script: bytes = b'\x03\x10\x27\x00/2miners.com/',
    tx_count: int = 3,
    overwintered: bool = True,
    **header_fields
) -> bytes:
    """Serialized block whose tail past the coinbase is filler"""
    body = serialize_coinbase(coinbase_script, overwintered)
    body += b'\xee' * 250 * (tx_count - 1)
    return serialize_header(**header_fields) + varint(tx_count) + body


class FakeNode(NodeService):
    """In-memory node keyed by block hash"""

    def __init__(self, tip_height: int = 100):
        self.tip_height = tip_height
        self.raw_blocks: Dict[str, bytes] = {}
        self.heights: Dict[str, int] = {}
        self.txids: Dict[str, List[str]] = {}
        self.by_timestamp: List[tuple] = []  # (time, hash)
        self.calls: List[tuple] = []

    def add_block(self, height: int, raw: Optional[bytes] = None, **block_fields) -> str:
        raw = raw or build_raw_block(**block_fields)
        block = parse_block(raw)
        block_hash = block.hash
        self.raw_blocks[block_hash] = raw
        self.heights[block_hash] = height
        self.txids[block_hash] = [f"{height:064x}"] + [
            f"{height:032x}{i:032x}" for i in range(1, block.transaction_count)
        ]
        self.by_timestamp.append((block.header.time, block_hash))
        self.by_timestamp.sort()
        return block_hash

    def _lookup(self, table, key):
        if key not in table:
            raise BlockNotFoundError(f"Block not found: {key}")
        return table[key]

    def _header(self, block_hash: str) -> BlockHeaderInfo:
        height = self.heights[block_hash]
        # Confirmations follow the tip like a live node
        return BlockHeaderInfo(
            hash=block_hash,
            height=height,
            confirmations=self.tip_height - height + 1,
            chainwork="00" * 31 + "ff",
            next_hash=None
        )

    async def get_tip_height(self) -> int:
        self.calls.append(("get_tip_height",))
        return self.tip_height

    async def get_block(self, block_hash: str):
        self.calls.append(("get_block", block_hash))
        raw = self._lookup(self.raw_blocks, block_hash)
        return parse_block(raw).with_transaction_ids(self.txids[block_hash])

    async def get_raw_block(self, block_hash: str) -> bytes:
        self.calls.append(("get_raw_block", block_hash))
        return self._lookup(self.raw_blocks, block_hash)

    async def get_block_header(self, hash_or_height: Union[str, int]) -> BlockHeaderInfo:
        self.calls.append(("get_block_header", hash_or_height))
        if isinstance(hash_or_height, int):
            for block_hash, height in self.heights.items():
                if height == hash_or_height:
                    return self._header(block_hash)
            raise BlockNotFoundError(f"Block height out of range: {hash_or_height}")
        self._lookup(self.heights, hash_or_height)
        return self._header(hash_or_height)

    async def get_block_hashes_by_timestamp(self, high: int, low: int) -> List[str]:
        self.calls.append(("get_block_hashes_by_timestamp", high, low))
        return [h for t, h in self.by_timestamp if low <= t < high]

    async def get_block_transaction_ids(self, block_hash: str) -> List[str]:
        self.calls.append(("get_block_transaction_ids", block_hash))
        return list(self._lookup(self.txids, block_hash))


class FakeTransactionService(TransactionService):
    def __init__(self, outputs: Optional[List[TransactionOutput]] = None):
        self.outputs = outputs if outputs is not None else [
            TransactionOutput(satoshis=150_000_000, address="t1MinerAddress"),
        ]
        self.calls: List[str] = []

    async def get_detailed_transaction(self, txid: str) -> DetailedTransaction:
        self.calls.append(txid)
        if txid.startswith("missing"):
            raise TransactionNotFoundError(txid)
        return DetailedTransaction(hash=txid, outputs=list(self.outputs))


@pytest.fixture
def node():
    return FakeNode(tip_height=100)


@pytest.fixture
def transactions():
    return FakeTransactionService()


@pytest.fixture
def pools():
    return PoolAttributor(POOLS)


@pytest.fixture
def cache():
    return ConfirmationCache(block_cache_size=10, summary_cache_size=10)
