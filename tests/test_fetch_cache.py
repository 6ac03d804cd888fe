"""
Tests for the last-good-value fetch cache.
"""

import threading
import time

import pytest

from coolctl.core.services.fetch_cache import FetchCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestFetchCache:
    def test_fetch_and_store(self):
        cache = FetchCache()
        read = cache.get("k", lambda: [1, 2])
        assert read.value == [1, 2]
        assert not read.stale
        assert not read.from_cache
        assert cache.keys() == ["k"]

    def test_refetches_without_ttl(self):
        cache = FetchCache()
        calls = []
        cache.get("k", lambda: calls.append(1) or len(calls))
        read = cache.get("k", lambda: calls.append(1) or len(calls))
        assert read.value == 2
        assert len(calls) == 2

    def test_ttl_hit_and_expiry(self):
        clock = FakeClock()
        cache = FetchCache(ttl=60, clock=clock)
        cache.get("k", lambda: "first")
        clock.now += 30
        read = cache.get("k", lambda: "second")
        assert read.value == "first"
        assert read.from_cache
        assert read.age_seconds == 30
        clock.now += 31
        assert cache.get("k", lambda: "third").value == "third"

    def test_force_bypasses_ttl(self):
        cache = FetchCache(ttl=60)
        cache.get("k", lambda: "first")
        assert cache.get("k", lambda: "second", force=True).value == "second"

    def test_failure_keeps_previous_value(self):
        clock = FakeClock()
        cache = FetchCache(clock=clock)
        cache.get("k", lambda: ["good"])
        clock.now += 5

        def boom():
            raise RuntimeError("network down")

        read = cache.get("k", boom)
        assert read.value == ["good"]
        assert read.stale
        assert read.error == "network down"
        assert read.age_seconds == 5
        assert read.to_dict()["stale"] is True

        peek = cache.peek("k")
        assert peek.value == ["good"]
        assert peek.stale

    def test_failure_without_value_raises(self):
        cache = FetchCache()

        def boom():
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            cache.get("k", boom)
        assert cache.peek("k") is None
        assert cache.keys() == []

    def test_success_clears_error(self):
        cache = FetchCache()

        def boom():
            raise RuntimeError("x")

        cache.get("k", lambda: 1)
        assert cache.get("k", boom).stale
        cache.get("k", lambda: 2)
        peek = cache.peek("k")
        assert peek.value == 2
        assert not peek.stale

    def test_invalidate_and_clear(self):
        cache = FetchCache()
        cache.get("a", lambda: 1)
        cache.get("b", lambda: 2)
        cache.invalidate("a")
        assert cache.peek("a") is None
        cache.clear()
        assert cache.keys() == []

    def test_invalidate_releases_key_lock(self):
        cache = FetchCache()
        for i in range(50):
            cache.get(("deployments", i), lambda: [])
            cache.invalidate(("deployments", i))
        assert cache._key_locks == {}

        cache.get("a", lambda: 1)
        cache.get("b", lambda: 2)
        cache.clear()
        assert cache._key_locks == {}
        assert cache.get("a", lambda: 3).value == 3

    def test_in_flight_visible_to_peek(self):
        cache = FetchCache()
        cache.get("k", lambda: "old")
        started = threading.Event()
        release = threading.Event()

        def slow():
            started.set()
            release.wait(5)
            return "new"

        worker = threading.Thread(target=cache.get, args=("k", slow))
        worker.start()
        started.wait(5)
        assert cache.is_in_flight("k")
        peek = cache.peek("k")
        assert peek.value == "old"
        assert peek.stale
        release.set()
        worker.join(5)
        assert not cache.is_in_flight("k")
        assert cache.peek("k").value == "new"

    def test_same_key_fetches_serialize(self):
        cache = FetchCache(ttl=60)
        calls = []

        def fetch():
            calls.append(1)
            time.sleep(0.05)
            return "v"

        threads = [threading.Thread(target=cache.get, args=("k", fetch)) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)
        assert len(calls) == 1
