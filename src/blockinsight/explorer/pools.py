# src/blockinsight/explorer/pools.py
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import PoolInfo
from ..node.interfaces import TransactionOutput

logger = logging.getLogger(__name__)


class PoolAttributor:
    """
    Best-effort attribution of a block to a mining pool and a miner address.

    The signature table is built once and never mutated, so one instance can
    be shared freely between requests.
    """

    def __init__(self, pools: Iterable[Dict[str, Any]]):
        signatures: Dict[str, PoolInfo] = {}
        for pool in pools:
            info = PoolInfo(poolName=pool["poolName"], url=pool.get("url"))
            for search_string in pool.get("searchStrings", []):
                signatures[search_string] = info
        self._signatures: Tuple[Tuple[str, PoolInfo], ...] = tuple(signatures.items())

    @classmethod
    def from_file(cls, path: str) -> 'PoolAttributor':
        with open(path, 'r') as f:
            pools = json.load(f)
        attributor = cls(pools)
        logger.info(f"Loaded {len(attributor)} pool signatures from {path}")
        return attributor

    def __len__(self) -> int:
        return len(self._signatures)

    def get_pool_info(self, coinbase_script: bytes) -> Optional[PoolInfo]:
        """First configured signature found in the coinbase script wins"""
        text = coinbase_script.decode('utf-8', errors='replace')
        for signature, info in self._signatures:
            if signature in text:
                return info
        return None

    @staticmethod
    def guess_miner_address(outputs: List[TransactionOutput], reward: int) -> Optional[str]:
        """
        Address of the largest coinbase output.

        Outputs paying exactly half the reward go to the development fund and
        are skipped. Ties keep the first output seen.
        """
        address = None
        largest = 0
        for output in outputs:
            if output.satoshis * 2 == reward:
                continue
            if output.satoshis > largest:
                largest = output.satoshis
                address = output.address
        return address

    def attribute(
        self,
        coinbase_script: bytes,
        outputs: List[TransactionOutput],
        reward: int
    ) -> Tuple[Optional[PoolInfo], Optional[str]]:
        return self.get_pool_info(coinbase_script), self.guess_miner_address(outputs, reward)
