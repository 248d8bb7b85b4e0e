"""Tests for the analysis TTL cache."""
import pytest

from rift_counter.services.analysis_cache import (
    ANALYSIS_PREFIX,
    AnalysisCache,
    analysis_fingerprint,
    analysis_key,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return AnalysisCache(default_ttl=60, clock=clock)


class TestFingerprint:
    def test_stable_for_same_request(self):
        a = analysis_fingerprint(["zed", "ahri"], "mid", None, {"prefer_counters": False})
        b = analysis_fingerprint(["zed", "ahri"], "mid", None, {"prefer_counters": False})
        assert a == b
        assert len(a) == 32

    def test_differs_by_each_field(self):
        base = analysis_fingerprint(["zed"], "mid")
        assert analysis_fingerprint(["ahri"], "mid") != base
        assert analysis_fingerprint(["zed"], "baron") != base
        assert analysis_fingerprint(["zed"], "mid", "lux") != base
        assert analysis_fingerprint(["zed"], "mid", None, {"max_counters": 3}) != base

    def test_option_key_order_does_not_matter(self):
        assert analysis_fingerprint(["zed"], "mid", None, {"a": 1, "b": 2}) == analysis_fingerprint(
            ["zed"], "mid", None, {"b": 2, "a": 1}
        )

    def test_key_prefix(self):
        assert analysis_key("abc") == f"{ANALYSIS_PREFIX}abc"


class TestAnalysisCache:
    def test_get_set(self, cache):
        assert cache.get("k") is None
        cache.set("k", {"v": 1})
        assert cache.get("k") == {"v": 1}
        assert len(cache) == 1

    def test_expiry(self, cache, clock):
        cache.set("k", "value")
        clock.now += 59
        assert cache.get("k") == "value"
        clock.now += 1
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_per_entry_ttl(self, cache, clock):
        cache.set("short", 1, ttl=5)
        cache.set("long", 2)
        clock.now += 10
        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_invalidate(self, cache):
        cache.set("k", 1)
        assert cache.invalidate("k") is True
        assert cache.invalidate("k") is False

    def test_invalidate_prefix(self, cache):
        cache.set(analysis_key("a"), 1)
        cache.set(analysis_key("b"), 2)
        cache.set("other:c", 3)
        assert cache.invalidate_prefix(ANALYSIS_PREFIX) == 2
        assert cache.get("other:c") == 3

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.clear()
        assert len(cache) == 0

    def test_expired_entries_swept_on_write(self, cache, clock):
        for i in range(1000):
            cache.set(f"k{i}", i, ttl=10)
        clock.now = 10_000
        cache.set("fresh", "value")
        assert len(cache) == 1
        assert cache.get("fresh") == "value"

    def test_sweep_is_throttled(self, clock):
        cache = AnalysisCache(default_ttl=60, clock=clock, cleanup_interval=100)
        cache.set("a", 1, ttl=5)  # sweep runs here, nothing expired yet
        clock.now += 10
        cache.set("b", 2, ttl=1000)
        assert len(cache) == 2  # within the interval, "a" is still held
        clock.now += 100
        cache.set("c", 3)
        assert len(cache) == 2
        assert cache.get("a") is None
