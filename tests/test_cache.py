from riichi_core.cache import ShantenCache


def test_cache_get_or_compute_counts_hits():
    cache: ShantenCache[int] = ShantenCache(max_size=4)
    calls = []

    def compute() -> int:
        calls.append(1)
        return 42

    assert cache.get_or_compute("a", compute) == 42
    assert cache.get_or_compute("a", compute) == 42
    assert len(calls) == 1
    assert cache.hits == 1
    assert cache.misses == 1


def test_cache_evicts_oldest_entries():
    cache: ShantenCache[int] = ShantenCache(max_size=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("c", 3)
    assert len(cache) == 2
    assert cache.get("a") is None
    assert cache.get("c") == 3


def test_cache_disabled_when_size_zero():
    cache: ShantenCache[int] = ShantenCache(max_size=0)
    cache.put("a", 1)
    assert len(cache) == 0
    assert cache.get_or_compute("a", lambda: 7) == 7


def test_cache_clear_resets_counters():
    cache: ShantenCache[int] = ShantenCache()
    cache.put("a", 1)
    cache.get("a")
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == 0
    assert cache.misses == 0
