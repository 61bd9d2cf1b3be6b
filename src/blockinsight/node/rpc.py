# src/blockinsight/node/rpc.py
import asyncio
import itertools
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from .interfaces import (
    BlockHeaderInfo,
    DetailedTransaction,
    NodeService,
    TransactionOutput,
    TransactionService,
)
from ..blockchain.block import Block
from ..blockchain.encoding import parse_block
from ..exceptions import (
    BlockNotFoundError,
    CollaboratorError,
    RpcError,
    TransactionNotFoundError,
)
from ..monitoring.metrics import rpc_calls
from ..utils.config import Config

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """Minimal JSON-RPC 1.0 client for a zcashd-family node"""

    def __init__(self, url: str, user: Optional[str] = None, password: Optional[str] = None, timeout: float = 30):
        self.url = url
        self.auth = aiohttp.BasicAuth(user, password or "") if user else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None
        self._ids = itertools.count(1)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(auth=self.auth, timeout=self.timeout)
        return self._session

    async def call(self, method: str, *params: Any) -> Any:
        payload = {"jsonrpc": "1.0", "id": next(self._ids), "method": method, "params": list(params)}
        rpc_calls.labels(method=method).inc()
        logger.debug(f"RPC {method} {params}")

        try:
            status, data = await self._post(method, payload)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise CollaboratorError(f"Node request {method} failed: {e!r}") from e

        if data is None:
            raise CollaboratorError(f"Node returned an empty response to {method}: HTTP {status}")
        error = data.get("error")
        if error:
            raise RpcError(error.get("message", "RPC error"), error.get("code"))
        return data.get("result")

    @retry(
        retry=retry_if_exception_type(aiohttp.ClientConnectionError),
        wait=wait_fixed(0.5),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    async def _post(self, method: str, payload: Dict[str, Any]) -> Tuple[int, Optional[Dict[str, Any]]]:
        session = self._get_session()
        async with session.post(self.url, json=payload) as response:
            # The node answers RPC errors with HTTP 500 and a JSON body
            try:
                return response.status, await response.json(content_type=None)
            except ValueError:
                raise CollaboratorError(f"Node returned non-JSON response to {method}: HTTP {response.status}")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()


def _is_not_found(error: RpcError) -> bool:
    return error.code in Config.NOT_FOUND_CODES


class RpcNodeService(NodeService):
    def __init__(self, client: JsonRpcClient):
        self.client = client

    async def get_tip_height(self) -> int:
        return await self.client.call("getblockcount")

    async def get_raw_block(self, block_hash: str) -> bytes:
        try:
            raw_hex = await self.client.call("getblock", block_hash, 0)
        except RpcError as e:
            if _is_not_found(e):
                raise BlockNotFoundError(f"Block not found: {block_hash}") from e
            raise
        return bytes.fromhex(raw_hex)

    async def get_block_transaction_ids(self, block_hash: str) -> List[str]:
        try:
            result = await self.client.call("getblock", block_hash, 1)
        except RpcError as e:
            if _is_not_found(e):
                raise BlockNotFoundError(f"Block not found: {block_hash}") from e
            raise
        return list(result["tx"])

    async def get_block(self, block_hash: str) -> Block:
        block = parse_block(await self.get_raw_block(block_hash))
        return block.with_transaction_ids(await self.get_block_transaction_ids(block_hash))

    async def get_block_header(self, hash_or_height: Union[str, int]) -> BlockHeaderInfo:
        try:
            block_hash = hash_or_height
            if isinstance(hash_or_height, int):
                block_hash = await self.client.call("getblockhash", hash_or_height)
            result = await self.client.call("getblockheader", block_hash, True)
        except RpcError as e:
            if _is_not_found(e):
                raise BlockNotFoundError(f"Block not found: {hash_or_height}") from e
            raise

        return BlockHeaderInfo(
            hash=result["hash"],
            height=result["height"],
            confirmations=result["confirmations"],
            chainwork=result.get("chainwork"),
            next_hash=result.get("nextblockhash")
        )

    async def get_block_hashes_by_timestamp(self, high: int, low: int) -> List[str]:
        result = await self.client.call("getblockhashes", high, low)
        hashes = []
        for entry in result or []:
            # logicalTimes mode returns objects instead of plain hashes
            hashes.append(entry["blockhash"] if isinstance(entry, dict) else entry)
        return hashes


class RpcTransactionService(TransactionService):
    def __init__(self, client: JsonRpcClient):
        self.client = client

    async def get_detailed_transaction(self, txid: str) -> DetailedTransaction:
        try:
            result = await self.client.call("getrawtransaction", txid, 1)
        except RpcError as e:
            if _is_not_found(e):
                raise TransactionNotFoundError(f"Transaction not found: {txid}") from e
            raise

        outputs = []
        for vout in result.get("vout", []):
            if "valueZat" in vout:
                satoshis = int(vout["valueZat"])
            else:
                satoshis = int(Decimal(str(vout["value"])) * Config.COIN)
            addresses = vout.get("scriptPubKey", {}).get("addresses") or []
            outputs.append(TransactionOutput(
                satoshis=satoshis,
                address=addresses[0] if addresses else None
            ))
        return DetailedTransaction(hash=result.get("txid", txid), outputs=outputs)
