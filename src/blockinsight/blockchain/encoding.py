# src/blockinsight/blockchain/encoding.py
import hashlib
import struct

from .block import Block, BlockHeader
from ..exceptions import BlockParseError

OVERWINTER_FLAG = 1 << 31


def double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


class BufferReader:
    """Sequential little-endian reader over a bytes buffer"""

    def __init__(self, data: bytes):
        self.data = data
        self.cursor = 0

    def read(self, length: int) -> bytes:
        if self.cursor + length > len(self.data):
            raise BlockParseError(
                f"Unexpected end of data: need {length} bytes at offset {self.cursor}, "
                f"have {len(self.data) - self.cursor}"
            )
        chunk = self.data[self.cursor:self.cursor + length]
        self.cursor += length
        return chunk

    def read_uint8(self) -> int:
        return self.read(1)[0]

    def read_uint32(self) -> int:
        return struct.unpack('<I', self.read(4))[0]

    def read_int32(self) -> int:
        return struct.unpack('<i', self.read(4))[0]

    def read_uint64(self) -> int:
        return struct.unpack('<Q', self.read(8))[0]

    def read_varint(self) -> int:
        prefix = self.read_uint8()
        if prefix < 0xfd:
            return prefix
        if prefix == 0xfd:
            return struct.unpack('<H', self.read(2))[0]
        if prefix == 0xfe:
            return self.read_uint32()
        return self.read_uint64()

    def read_var_bytes(self) -> bytes:
        return self.read(self.read_varint())

    def read_reversed_hex(self, length: int = 32) -> str:
        return self.read(length)[::-1].hex()

    def finished(self) -> bool:
        return self.cursor >= len(self.data)


def parse_block_header(reader: BufferReader) -> BlockHeader:
    """Read an Equihash header and hash it"""
    start = reader.cursor
    version = reader.read_int32()
    prev_hash = reader.read_reversed_hex()
    merkle_root = reader.read_reversed_hex()
    reserved = reader.read_reversed_hex()
    time = reader.read_uint32()
    bits = reader.read_uint32()
    nonce = reader.read_reversed_hex()
    solution = reader.read_var_bytes().hex()
    header_bytes = reader.data[start:reader.cursor]

    return BlockHeader(
        version=version,
        prev_hash=prev_hash,
        merkle_root=merkle_root,
        reserved=reserved,
        time=time,
        bits=bits,
        nonce=nonce,
        solution=solution,
        hash=double_sha256(header_bytes)[::-1].hex()
    )


def read_coinbase_script(reader: BufferReader) -> bytes:
    """
    Read the coinbase transaction just far enough to reach its input script.

    The rest of the transaction (outputs, shielded data) is left unread.
    """
    header = reader.read_uint32()
    if header & OVERWINTER_FLAG:
        reader.read_uint32()  # version group id
    input_count = reader.read_varint()
    if input_count == 0:
        raise BlockParseError("Coinbase transaction has no inputs")
    reader.read(36)  # null prevout
    return reader.read_var_bytes()


def parse_block(raw: bytes) -> Block:
    """
    Decode the parts of a raw block the explorer needs.

    Size comes from the byte length and the transaction count from the
    count field, so only the coinbase input is deserialized.
    """
    reader = BufferReader(raw)
    header = parse_block_header(reader)
    transaction_count = reader.read_varint()
    coinbase_script = read_coinbase_script(reader) if transaction_count else b''
    return Block(
        header=header,
        size=len(raw),
        transaction_count=transaction_count,
        coinbase_script=coinbase_script
    )
