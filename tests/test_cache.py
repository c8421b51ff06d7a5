"""Tests for cache module."""

import time
import pytest
from hypothesis import given, strategies as st

from pagewright.core.cache import BoundedCache, Stats


def test_cache_basic():
    """Test basic cache operations."""
    cache = BoundedCache[str](max_size=3)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")

    assert cache.get("a") == "value_a"
    assert cache.get("b") == "value_b"
    assert cache.get("c") == "value_c"
    assert len(cache) == 3


def test_cache_eviction():
    """Test oldest entry is evicted on size limit."""
    cache = BoundedCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")  # Should evict "a"

    assert cache.get("a") is None
    assert cache.get("b") == "value_b"
    assert cache.get("c") == "value_c"
    assert len(cache) == 2


def test_lookup_does_not_refresh_order():
    """Test eviction follows insertion order, not access order."""
    cache = BoundedCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")

    # Reading "a" does not protect it
    _ = cache.get("a")

    cache.set("c", "value_c")

    assert cache.get("a") is None
    assert cache.get("b") == "value_b"
    assert cache.get("c") == "value_c"


def test_overwrite_moves_to_newest():
    """Test overwriting re-inserts at the newest position."""
    cache = BoundedCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("a", "value_a2")
    cache.set("c", "value_c")  # Should evict "b"

    assert cache.get("a") == "value_a2"
    assert cache.get("b") is None
    assert len(cache) == 2


def test_cache_ttl():
    """Test TTL expiration."""
    cache = BoundedCache[str](max_size=10, ttl_seconds=0.2)

    cache.set("key", "value")
    assert cache.get("key") == "value"

    # Wait for expiration
    time.sleep(0.3)

    assert cache.get("key") is None
    assert cache.stats.expirations == 1
    assert len(cache) == 0


def test_cache_delete():
    """Test deletion."""
    cache = BoundedCache[str](max_size=10)

    cache.set("key", "value")
    assert cache.delete("key") is True
    assert cache.get("key") is None
    assert cache.delete("key") is False  # Already deleted


def test_cache_clear():
    """Test clearing cache."""
    cache = BoundedCache[str](max_size=10)

    cache.set("a", "value_a")
    cache.set("b", "value_b")

    cache.clear()

    assert len(cache) == 0
    assert cache.stats.size == 0
    assert cache.get("a") is None


def test_cache_contains():
    """Test __contains__ leaves statistics untouched."""
    cache = BoundedCache[str](max_size=10)

    cache.set("key", "value")

    assert "key" in cache
    assert "missing" not in cache
    assert cache.stats.hits == 0
    assert cache.stats.misses == 0


def test_stats_hit_miss():
    """Test statistics tracking."""
    cache = BoundedCache[str](max_size=10)

    cache.set("key", "value")

    _ = cache.get("key")  # Hit
    _ = cache.get("missing")  # Miss

    stats = cache.stats
    assert stats.hits == 1
    assert stats.misses == 1
    assert stats.hit_rate == 0.5


def test_stats_eviction():
    """Test eviction tracking."""
    cache = BoundedCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")  # Eviction

    assert cache.stats.evictions == 1
    assert cache.stats.size == 2


def test_stats_to_dict():
    """Test stats export."""
    assert Stats().hit_rate == 0.0

    cache = BoundedCache[str](max_size=10)
    cache.set("key", "value")
    _ = cache.get("key")

    stats_dict = cache.stats.to_dict()

    assert stats_dict["hits"] == 1
    assert stats_dict["max_size"] == 10
    assert stats_dict["hit_rate"] == 1.0


def test_invalid_max_size():
    """Test validation."""
    with pytest.raises(ValueError):
        BoundedCache[str](max_size=0)

    with pytest.raises(ValueError):
        BoundedCache[str](max_size=-1)


@given(
    st.lists(st.text(min_size=1, max_size=10), min_size=1, max_size=60),
    st.integers(min_value=1, max_value=20),
)
def test_size_never_exceeds_bound(keys, max_size):
    """Property test: the cache never holds more than max_size entries."""
    cache = BoundedCache[str](max_size=max_size)

    for key in keys:
        cache.set(key, f"value_{key}")
        assert len(cache) <= max_size

    # The newest distinct keys are retained
    newest = list(dict.fromkeys(reversed(keys)))[:max_size]
    for key in newest:
        assert cache.get(key) == f"value_{key}"


def test_generic_values():
    """Test non-string values round-trip unchanged."""
    cache = BoundedCache[int](max_size=10)
    cache.set("key", 42)

    result = cache.get("key")
    assert isinstance(result, int)
    assert result == 42
