# File: src/blockinsight/api/routes/blocks.py
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from ...explorer.api import ExplorerAPI
from ...explorer.models import BlockDetail, BlockIndex, BlockList, RawBlock

router = APIRouter(prefix="/api")

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


def get_explorer(request: Request) -> ExplorerAPI:
    return request.app.state.explorer


def check_block_hash(blockHash: str) -> str:
    if len(blockHash) < 64 or not HEX_PATTERN.match(blockHash):
        raise HTTPException(status_code=404, detail="Not found")
    return blockHash


@router.get("/block/{blockHash}", response_model=BlockDetail)
async def get_block(
    block_hash: str = Depends(check_block_hash),
    explorer: ExplorerAPI = Depends(get_explorer)
):
    block = await explorer.get_block(block_hash)
    if block is None:
        raise HTTPException(status_code=404, detail="Not found")
    return block


@router.get("/rawblock/{blockHash}", response_model=RawBlock)
async def get_raw_block(
    block_hash: str = Depends(check_block_hash),
    explorer: ExplorerAPI = Depends(get_explorer)
):
    raw = await explorer.get_raw_block(block_hash)
    if raw is None:
        raise HTTPException(status_code=404, detail="Not found")
    return raw


@router.get("/block-index/{height}", response_model=BlockIndex)
async def get_block_index(height: int, explorer: ExplorerAPI = Depends(get_explorer)):
    index = await explorer.get_block_index(height)
    if index is None:
        raise HTTPException(status_code=404, detail="Not found")
    return index


@router.get("/blocks", response_model=BlockList)
async def list_blocks(
    blockDate: Optional[str] = None,
    startTimestamp: Optional[int] = None,
    limit: Optional[int] = None,
    explorer: ExplorerAPI = Depends(get_explorer)
):
    return await explorer.list_blocks(blockDate, startTimestamp, limit)
