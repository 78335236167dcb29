"""
Unit tests for the TTL response cache.
"""

import threading

import pytest

from funhttp.cache import ResponseCache, CacheEntry, DEFAULT_TTL, weather_cache_key


class TestCacheEntry:

    def test_age(self):
        entry = CacheEntry(payload="x", created_at=100.0)
        assert entry.age(160.0) == 60.0

    def test_frozen(self):
        entry = CacheEntry(payload="x", created_at=100.0)
        with pytest.raises(AttributeError):
            entry.payload = "y"


class TestResponseCache:
    """Tests for ResponseCache."""

    def test_default_ttl_is_ten_minutes(self):
        assert DEFAULT_TTL == 600
        assert ResponseCache().ttl == 600

    def test_miss(self, clock):
        cache = ResponseCache(clock=clock)
        assert cache.get("paris_metric") is None
        assert "paris_metric" not in cache

    def test_put_then_get(self, clock):
        cache = ResponseCache(clock=clock)
        cache.put("paris_metric", "{}")

        assert cache.get("paris_metric") == "{}"
        assert "paris_metric" in cache
        assert len(cache) == 1

    def test_fresh_just_before_ttl(self, clock):
        cache = ResponseCache(ttl=600, clock=clock)
        cache.put("k", "v")

        clock.advance(599.9)
        assert cache.get("k") == "v"

    def test_stale_at_ttl(self, clock):
        cache = ResponseCache(ttl=600, clock=clock)
        cache.put("k", "v")

        clock.advance(600)
        assert cache.get("k") is None
        # Stale entries are not evicted, only ignored
        assert len(cache) == 1

    def test_put_replaces(self, clock):
        cache = ResponseCache(clock=clock)
        cache.put("k", "old")
        clock.advance(10)
        entry = cache.put("k", "new")

        assert entry.created_at == clock.now
        assert cache.get("k") == "new"

    def test_get_or_refresh_hit_skips_loader(self, clock):
        cache = ResponseCache(clock=clock)
        cache.put("k", "cached")

        def loader():
            raise AssertionError("loader should not be called")

        assert cache.get_or_refresh("k", loader) == "cached"

    def test_get_or_refresh_miss_stores(self, clock):
        cache = ResponseCache(clock=clock)
        calls = []

        def loader():
            calls.append(1)
            return "fresh"

        assert cache.get_or_refresh("k", loader) == "fresh"
        assert cache.get_or_refresh("k", loader) == "fresh"
        assert len(calls) == 1

    def test_get_or_refresh_reloads_stale(self, clock):
        cache = ResponseCache(ttl=600, clock=clock)
        cache.put("k", "old")
        clock.advance(601)

        assert cache.get_or_refresh("k", lambda: "new") == "new"
        assert cache.get("k") == "new"

    def test_loader_error_stores_nothing(self, clock):
        cache = ResponseCache(clock=clock)

        def loader():
            raise RuntimeError("upstream down")

        with pytest.raises(RuntimeError):
            cache.get_or_refresh("k", loader)

        assert len(cache) == 0

    def test_loader_error_keeps_stale_entry(self, clock):
        cache = ResponseCache(ttl=600, clock=clock)
        cache.put("k", "old")
        clock.advance(700)

        def loader():
            raise RuntimeError("upstream down")

        with pytest.raises(RuntimeError):
            cache.get_or_refresh("k", loader)

        assert len(cache) == 1
        assert cache.get("k") is None

    def test_loader_runs_without_lock(self, clock):
        cache = ResponseCache(clock=clock)
        loading = threading.Event()
        release = threading.Event()

        def slow_loader():
            loading.set()
            release.wait(timeout=5.0)
            return "slow"

        worker = threading.Thread(target=cache.get_or_refresh, args=("a", slow_loader))
        worker.start()
        try:
            assert loading.wait(timeout=5.0)

            # Other keys stay usable while the loader is blocked
            done = threading.Event()

            def other_key():
                cache.put("b", "fast")
                if cache.get("b") == "fast" and len(cache) == 1:
                    done.set()

            other = threading.Thread(target=other_key)
            other.start()
            other.join(timeout=2.0)

            assert done.is_set()
        finally:
            release.set()
            worker.join(timeout=5.0)

        assert cache.get("a") == "slow"
        assert len(cache) == 2

    def test_clear(self, clock):
        cache = ResponseCache(clock=clock)
        cache.put("a", "1")
        cache.put("b", "2")
        cache.clear()
        assert len(cache) == 0

    def test_concurrent_puts(self):
        cache = ResponseCache()

        def writer(n):
            for i in range(200):
                cache.put(f"key{i % 20}", f"{n}-{i}")
                cache.get(f"key{i % 20}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 20


class TestWeatherCacheKey:

    def test_city_lower_cased(self):
        assert weather_cache_key("Paris", "metric") == "paris_metric"
        assert weather_cache_key("PARIS", "metric") == weather_cache_key("paris", "metric")

    def test_units_distinguish(self):
        assert weather_cache_key("Oslo", "metric") != weather_cache_key("Oslo", "imperial")
