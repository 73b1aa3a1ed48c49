"""
Unit tests for the metadata TTL cache.
"""

import threading

import pytest

from seqcite.tools.validators import MetadataCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.unit
class TestMetadataCache:
    """Expiry, eviction and thread safety."""

    def test_get_set(self, clock):
        cache = MetadataCache(ttl_seconds=60, clock=clock)
        cache.set("SRR123456", {"title": "liver"})
        assert cache.get("SRR123456") == {"title": "liver"}
        assert "SRR123456" in cache
        assert cache.get("SRR000000") is None

    def test_expiry(self, clock):
        cache = MetadataCache(ttl_seconds=60, clock=clock)
        cache.set("GSE1", {"title": "t"})

        clock.advance(59)
        assert cache.get("GSE1") is not None

        clock.advance(1)
        assert cache.get("GSE1") is None
        assert len(cache) == 0

    def test_overwrite_refreshes_timestamp(self, clock):
        cache = MetadataCache(ttl_seconds=60, clock=clock)
        cache.set("GSE1", {"v": "1"})
        clock.advance(50)
        cache.set("GSE1", {"v": "2"})
        clock.advance(50)
        assert cache.get("GSE1") == {"v": "2"}

    def test_oldest_entry_evicted_when_full(self, clock):
        cache = MetadataCache(ttl_seconds=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_overwrite_does_not_evict(self, clock):
        cache = MetadataCache(max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        assert cache.get("a") == 10
        assert cache.get("b") == 2

    def test_clear_and_stats(self, clock):
        cache = MetadataCache(ttl_seconds=30, max_entries=5, clock=clock)
        cache.set("a", 1)
        assert cache.stats() == {"size": 1, "max_entries": 5, "ttl_seconds": 30}
        cache.clear()
        assert len(cache) == 0

    def test_rejects_empty_capacity(self):
        with pytest.raises(ValueError):
            MetadataCache(max_entries=0)

    def test_concurrent_writers(self):
        cache = MetadataCache(max_entries=50)

        def writer(offset):
            for i in range(200):
                cache.set(f"key-{offset}-{i}", i)
                cache.get(f"key-{offset}-{i // 2}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 50
