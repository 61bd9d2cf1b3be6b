# src/blockinsight/explorer/cache.py
import threading
import logging
from collections import OrderedDict
from typing import Any, Dict, Optional

from .models import BlockDetail, BlockSummary
from ..monitoring.metrics import cache_hits, cache_misses, cache_stores
from ..utils.config import Config

logger = logging.getLogger(__name__)


class LRUCache:
    """
    Thread-safe least-recently-used map.

    Uses OrderedDict for O(1) access and eviction.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.cache: OrderedDict[str, Any] = OrderedDict()
        self.lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self.lock:
            if key in self.cache:
                self.cache.move_to_end(key)
                return self.cache[key]
            return None

    def put(self, key: str, value: Any) -> None:
        with self.lock:
            self.cache[key] = value
            self.cache.move_to_end(key)
            if len(self.cache) > self.capacity:
                self.cache.popitem(last=False)

    def __contains__(self, key: str) -> bool:
        with self.lock:
            return key in self.cache

    def __len__(self) -> int:
        with self.lock:
            return len(self.cache)


class ConfirmationCache:
    """
    Block detail and block summary caches keyed by block hash.

    Only blocks buried at least `min_confirmations` deep are admitted, so a
    cached entry can be trusted until it is evicted. Confirmations on a
    cached detail are derived from the tip height on every read.
    """

    def __init__(
        self,
        block_cache_size: int = Config.DEFAULT_BLOCK_CACHE_SIZE,
        summary_cache_size: int = Config.DEFAULT_BLOCK_SUMMARY_CACHE_SIZE,
        min_confirmations: int = Config.BLOCK_CACHE_CONFIRMATIONS
    ):
        self.blocks = LRUCache(block_cache_size)
        self.summaries = LRUCache(summary_cache_size)
        self.min_confirmations = min_confirmations

    def has_block(self, block_hash: str) -> bool:
        """Whether a detail is cached; counts a miss when it is not"""
        if block_hash in self.blocks:
            return True
        cache_misses.labels(cache='block').inc()
        return False

    def get_block(self, block_hash: str, tip_height: int) -> Optional[BlockDetail]:
        block = self.blocks.get(block_hash)
        if block is None:
            cache_misses.labels(cache='block').inc()
            return None
        cache_hits.labels(cache='block').inc()
        return block.with_confirmations(tip_height - block.height + 1)

    def put_block(self, block_hash: str, block: BlockDetail, confirmations: int) -> bool:
        return self._admit(self.blocks, 'block', block_hash, block, confirmations)

    def get_summary(self, block_hash: str) -> Optional[BlockSummary]:
        summary = self.summaries.get(block_hash)
        if summary is None:
            cache_misses.labels(cache='summary').inc()
            return None
        cache_hits.labels(cache='summary').inc()
        return summary

    def put_summary(self, block_hash: str, summary: BlockSummary, confirmations: int) -> bool:
        return self._admit(self.summaries, 'summary', block_hash, summary, confirmations)

    def _admit(self, cache: LRUCache, name: str, block_hash: str, entity: Any, confirmations: int) -> bool:
        if confirmations < self.min_confirmations:
            return False
        cache.put(block_hash, entity)
        cache_stores.labels(cache=name).inc()
        logger.debug(f"Cached {name} {block_hash} at {confirmations} confirmations")
        return True

    def get_stats(self) -> Dict[str, int]:
        return {
            "blocks": len(self.blocks),
            "block_capacity": self.blocks.capacity,
            "summaries": len(self.summaries),
            "summary_capacity": self.summaries.capacity,
        }
