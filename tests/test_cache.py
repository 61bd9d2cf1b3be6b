# tests/test_cache.py
import threading

import pytest

from blockinsight.explorer.cache import ConfirmationCache, LRUCache
from blockinsight.explorer.models import BlockDetail, BlockSummary


def make_detail(height: int = 90, confirmations: int = 11) -> BlockDetail:
    return BlockDetail(
        hash="aa" * 32,
        size=1500,
        height=height,
        version=4,
        merkleroot="bb" * 32,
        tx=["cc" * 32],
        time=1704067200,
        nonce="00" * 32,
        solution="",
        bits="1f07ffff",
        difficulty=1.0,
        chainwork="00" * 32,
        confirmations=confirmations,
        previousblockhash="dd" * 32,
        nextblockhash=None,
        reward=20.0,
        minedBy="t1Miner",
        isMainChain=True,
        poolInfo=None
    )


def make_summary(height: int = 90) -> BlockSummary:
    return BlockSummary(height=height, size=1500, hash="aa" * 32, time=1704067200, txlength=1)


class TestLRUCache:
    def test_evicts_least_recently_used(self):
        cache = LRUCache(2)
        cache.put("a", 1)
        cache.put("b", 2)
        assert cache.get("a") == 1  # "b" is now least recently used
        cache.put("c", 3)
        assert "b" not in cache
        assert cache.get("a") == 1
        assert cache.get("c") == 3
        assert len(cache) == 2

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            LRUCache(0)

    def test_concurrent_writers(self):
        cache = LRUCache(50)

        def writer(offset):
            for i in range(200):
                cache.put(f"{offset}-{i}", i)
                cache.get(f"{offset}-{i // 2}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(cache) == 50


class TestConfirmationCache:
    @pytest.fixture
    def confirmation_cache(self):
        return ConfirmationCache(block_cache_size=4, summary_cache_size=4)

    def test_shallow_block_never_cached(self, confirmation_cache):
        detail = make_detail(height=96, confirmations=5)
        assert confirmation_cache.put_block(detail.hash, detail, 5) is False
        assert confirmation_cache.get_block(detail.hash, tip_height=100) is None

    def test_confirmations_recomputed_on_every_read(self, confirmation_cache):
        detail = make_detail(height=95, confirmations=6)
        assert confirmation_cache.put_block(detail.hash, detail, 6) is True

        assert confirmation_cache.get_block(detail.hash, tip_height=100).confirmations == 6
        assert confirmation_cache.get_block(detail.hash, tip_height=101).confirmations == 7
        assert confirmation_cache.get_block(detail.hash, tip_height=150).confirmations == 56

    def test_cached_payload_not_mutated(self, confirmation_cache):
        detail = make_detail(height=95, confirmations=6)
        confirmation_cache.put_block(detail.hash, detail, 6)
        confirmation_cache.get_block(detail.hash, tip_height=200)
        assert detail.confirmations == 6

    def test_summary_threshold(self, confirmation_cache):
        summary = make_summary()
        assert confirmation_cache.put_summary(summary.hash, summary, 5) is False
        assert confirmation_cache.get_summary(summary.hash) is None
        assert confirmation_cache.put_summary(summary.hash, summary, 6) is True
        assert confirmation_cache.get_summary(summary.hash) == summary

    def test_has_block(self, confirmation_cache):
        assert not confirmation_cache.has_block("aa" * 32)
        confirmation_cache.put_block("aa" * 32, make_detail(), 11)
        assert confirmation_cache.has_block("aa" * 32)

    def test_caches_are_independent(self, confirmation_cache):
        summary = make_summary()
        confirmation_cache.put_summary(summary.hash, summary, 10)
        assert confirmation_cache.get_block(summary.hash, tip_height=100) is None

    def test_stats(self, confirmation_cache):
        summary = make_summary()
        confirmation_cache.put_summary(summary.hash, summary, 10)
        stats = confirmation_cache.get_stats()
        assert stats["summaries"] == 1
        assert stats["blocks"] == 0
        assert stats["block_capacity"] == 4
