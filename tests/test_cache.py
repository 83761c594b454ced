from __future__ import annotations

import pytest

from devcred.services.metadata.cache import MetadataCache


class TestMetadataCache:
    def test_get_returns_stored_value(self, clock):
        cache = MetadataCache(capacity=3, ttl=60, clock=clock)
        cache.set("ipfs://a", {"name": "A"})
        assert cache.get("ipfs://a") == {"name": "A"}
        assert "ipfs://a" in cache
        assert len(cache) == 1

    def test_get_missing_returns_default(self, clock):
        cache = MetadataCache(capacity=3, ttl=60, clock=clock)
        sentinel = object()
        assert cache.get("ipfs://missing") is None
        assert cache.get("ipfs://missing", sentinel) is sentinel

    def test_entry_expires_after_ttl(self, clock):
        cache = MetadataCache(capacity=3, ttl=60, clock=clock)
        cache.set("ipfs://a", {"name": "A"})

        clock.advance(59)
        assert cache.get("ipfs://a") == {"name": "A"}

        clock.advance(1)
        assert cache.get("ipfs://a") is None
        assert "ipfs://a" not in cache
        assert len(cache) == 0

    def test_read_does_not_extend_lifetime(self, clock):
        cache = MetadataCache(capacity=3, ttl=60, clock=clock)
        cache.set("ipfs://a", 1)
        clock.advance(30)
        cache.get("ipfs://a")
        clock.advance(30)
        assert cache.get("ipfs://a") is None

    def test_capacity_evicts_oldest_inserted(self, clock):
        cache = MetadataCache(capacity=3, ttl=60, clock=clock)
        for key in ("k1", "k2", "k3"):
            cache.set(key, key)
            clock.advance(1)

        cache.set("k4", "k4")

        assert len(cache) == 3
        assert "k1" not in cache
        assert [cache.get(k) for k in ("k2", "k3", "k4")] == ["k2", "k3", "k4"]

    def test_read_does_not_protect_from_eviction(self, clock):
        cache = MetadataCache(capacity=2, ttl=60, clock=clock)
        cache.set("k1", 1)
        cache.set("k2", 2)
        cache.get("k1")  # no LRU touch
        cache.set("k3", 3)
        assert "k1" not in cache
        assert "k2" in cache

    def test_replacing_key_does_not_evict(self, clock):
        cache = MetadataCache(capacity=2, ttl=60, clock=clock)
        cache.set("k1", 1)
        cache.set("k2", 2)
        cache.set("k1", 10)
        assert len(cache) == 2
        assert cache.get("k1") == 10
        assert cache.get("k2") == 2

    def test_replaced_key_becomes_newest(self, clock):
        cache = MetadataCache(capacity=2, ttl=60, clock=clock)
        cache.set("k1", 1)
        cache.set("k2", 2)
        cache.set("k1", 10)
        cache.set("k3", 3)
        assert "k2" not in cache
        assert cache.get("k1") == 10

    def test_expired_entries_free_capacity(self, clock):
        cache = MetadataCache(capacity=2, ttl=10, clock=clock)
        cache.set("k1", 1)
        clock.advance(5)
        cache.set("k2", 2)
        clock.advance(6)  # k1 expired, k2 still live
        cache.set("k3", 3)
        assert "k2" in cache
        assert "k3" in cache

    def test_clear_empties_cache(self, clock):
        cache = MetadataCache(capacity=3, ttl=60, clock=clock)
        cache.set("k1", 1)
        cache.set("k2", 2)
        cache.clear()
        assert len(cache) == 0
        assert cache.get("k1") is None
        cache.clear()  # idempotent
        assert len(cache) == 0

    @pytest.mark.parametrize("capacity, ttl", [(0, 60), (3, 0), (3, -1)])
    def test_rejects_invalid_bounds(self, capacity, ttl):
        with pytest.raises(ValueError):
            MetadataCache(capacity=capacity, ttl=ttl)
