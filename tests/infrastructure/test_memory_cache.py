"""Tests for the in-process MemoryCache."""

from __future__ import annotations

from shiprate.domain.entries import ErrorEntry, RatesEntry
from shiprate.infrastructure.cache.base import Cache
from shiprate.infrastructure.cache.memory import MemoryCache


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestMemoryCache:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryCache(), Cache)

    def test_read_miss(self) -> None:
        assert MemoryCache().read("missing") is None

    def test_write_then_read(self) -> None:
        cache = MemoryCache()
        entry = RatesEntry(rates={"Ground": 1050.0})
        cache.write("k", entry)
        assert cache.read("k") == entry
        assert "k" in cache
        assert len(cache) == 1

    def test_fetch_computes_once(self) -> None:
        cache = MemoryCache()
        calls = 0

        def compute() -> RatesEntry:
            nonlocal calls
            calls += 1
            return RatesEntry(rates={"Ground": 1.0})

        first = cache.fetch("k", compute)
        second = cache.fetch("k", compute)
        assert first == second
        assert calls == 1

    def test_error_entries_are_values(self) -> None:
        cache = MemoryCache()
        cache.write("k", ErrorEntry(message="Shipping Error: nope"))
        cached = cache.fetch("k", lambda: RatesEntry())
        assert cached == ErrorEntry(message="Shipping Error: nope")

    def test_entries_expire(self) -> None:
        clock = _Clock()
        cache = MemoryCache(ttl_seconds=60, clock=clock)
        cache.write("k", RatesEntry())
        clock.now += 59
        assert cache.read("k") is not None
        clock.now += 1
        assert cache.read("k") is None
        assert len(cache) == 0

    def test_no_ttl_never_expires(self) -> None:
        clock = _Clock()
        cache = MemoryCache(clock=clock)
        cache.write("k", RatesEntry())
        clock.now += 10**9
        assert cache.read("k") is not None

    def test_delete_and_clear(self) -> None:
        cache = MemoryCache()
        cache.write("a", RatesEntry())
        cache.write("b", RatesEntry())
        cache.delete("a")
        cache.delete("never-written")
        assert cache.read("a") is None
        cache.clear()
        assert len(cache) == 0
