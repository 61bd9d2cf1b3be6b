# File: src/blockinsight/explorer/models.py
from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_serializer
from typing import Any, Dict, List, Optional


class PoolInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    poolName: str
    url: Optional[str] = None


class _MinedBlock(BaseModel):
    """Shared rendering for entities that carry pool attribution"""
    model_config = ConfigDict(frozen=True)

    poolInfo: Optional[PoolInfo] = None
    minedBy: Optional[str] = None

    @field_validator('poolInfo', mode='before')
    @classmethod
    def empty_pool_info(cls, value: Any) -> Any:
        # Rendered as {} when no signature matched
        return value or None

    @field_serializer('poolInfo')
    def serialize_pool_info(self, pool_info: Optional[PoolInfo]) -> Dict[str, Any]:
        return pool_info.model_dump() if pool_info else {}

    @model_serializer(mode='wrap')
    def omit_unknown_miner(self, handler) -> Dict[str, Any]:
        data = handler(self)
        if data.get('minedBy') is None:
            data.pop('minedBy', None)
        return data


class BlockDetail(_MinedBlock):
    hash: str
    size: int
    height: int
    version: int
    merkleroot: str
    tx: List[str]
    time: int
    nonce: str
    solution: str
    bits: str
    difficulty: float
    chainwork: Optional[str] = None
    confirmations: int
    previousblockhash: Optional[str] = None
    nextblockhash: Optional[str] = None
    reward: float
    isMainChain: bool

    def with_confirmations(self, confirmations: int) -> 'BlockDetail':
        return self.model_copy(update={'confirmations': confirmations})


class BlockSummary(_MinedBlock):
    height: int
    size: int
    hash: str
    time: int
    txlength: int


class PaginationCursor(BaseModel):
    next: Optional[str] = None
    prev: str
    currentTs: int
    current: str
    isToday: bool
    more: bool
    moreTs: Optional[int] = None

    @model_serializer(mode='wrap')
    def omit_more_ts(self, handler) -> Dict[str, Any]:
        data = handler(self)
        if not self.more:
            data.pop('moreTs', None)
        return data


class BlockList(BaseModel):
    blocks: List[BlockSummary]
    length: int
    pagination: PaginationCursor


class RawBlock(BaseModel):
    rawblock: str


class BlockIndex(BaseModel):
    blockHash: str
