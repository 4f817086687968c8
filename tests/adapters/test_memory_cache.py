import time

from poi_bridge.adapters.cache import InMemoryCache


def test_set_and_get():
    cache = InMemoryCache(name="test")
    cache.set("lyon", 1)

    assert cache.get("lyon") == 1
    assert cache.get("nice") is None


def test_expired_entries_are_dropped(monkeypatch):
    cache = InMemoryCache(name="test", default_ttl_seconds=10)
    cache.set("lyon", 1)

    later = time.time() + 11
    monkeypatch.setattr(time, "time", lambda: later)

    assert cache.get("lyon") is None
    assert cache.size() == 0


def test_entries_without_ttl_never_expire(monkeypatch):
    cache = InMemoryCache(name="test")
    cache.set("lyon", 1)

    later = time.time() + 10**9
    monkeypatch.setattr(time, "time", lambda: later)

    assert cache.get("lyon") == 1


def test_max_size_evicts_oldest():
    cache = InMemoryCache(name="test", max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("c") == 3
    assert cache.size() == 2


def test_overwriting_a_key_does_not_evict():
    cache = InMemoryCache(name="test", max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)

    assert cache.get("a") == 10
    assert cache.get("b") == 2
