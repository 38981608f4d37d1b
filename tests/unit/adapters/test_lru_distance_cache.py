"""Tests for the LRU distance cache adapter."""

import math

import pytest

from geocluster.adapters.cache.lru_distance_cache import (
    DirectDistance,
    LRUDistanceCache,
)
from geocluster.domain.value_objects.geo_point import haversine_km


def _fill(cache: LRUDistanceCache, n: int, start: int = 0) -> None:
    """Insert n distinct keys: (i, 0) → (i, 1)."""
    for i in range(start, start + n):
        cache.get_or_compute(float(i) / 100, 0.0, float(i) / 100, 1.0)


def _key(i: int) -> tuple:
    return (round(i / 100, 6), 0.0, round(i / 100, 6), 1.0)


# ─── Transparency ────────────────────────────────────────────────────


def test_miss_returns_haversine():
    cache = LRUDistanceCache()
    d = cache.get_or_compute(48.8566, 2.3522, 48.8584, 2.2945)
    assert d == haversine_km(48.8566, 2.3522, 48.8584, 2.2945)
    assert cache.misses == 1
    assert cache.hits == 0


def test_hit_returns_same_value():
    cache = LRUDistanceCache()
    first = cache.get_or_compute(48.8566, 2.3522, 48.8584, 2.2945)
    second = cache.get_or_compute(48.8566, 2.3522, 48.8584, 2.2945)
    assert first == second
    assert cache.hits == 1
    assert len(cache) == 1


def test_values_match_direct_over_mixed_sequence():
    cache = LRUDistanceCache(capacity=5)
    direct = DirectDistance()
    coords = [(48.0 + i * 0.1, 2.0, 48.5, 2.0 + (i % 3) * 0.2) for i in range(12)]
    for c in coords + coords[::-1] + coords:
        assert math.isclose(cache.get_or_compute(*c), direct.get_or_compute(*c), abs_tol=1e-9)


# ─── Key quantization ────────────────────────────────────────────────


def test_coordinates_rounding_to_same_key_hit():
    cache = LRUDistanceCache()
    cache.get_or_compute(48.8566001, 2.3522, 48.8584, 2.2945)
    cache.get_or_compute(48.8566004, 2.3522, 48.8584, 2.2945)
    assert cache.hits == 1
    assert len(cache) == 1


def test_coordinates_differing_at_precision_miss():
    cache = LRUDistanceCache()
    cache.get_or_compute(48.856601, 2.3522, 48.8584, 2.2945)
    cache.get_or_compute(48.856602, 2.3522, 48.8584, 2.2945)
    assert cache.misses == 2
    assert len(cache) == 2


def test_key_is_ordered_pair():
    """(A, B) and (B, A) are different keys; the values still agree."""
    cache = LRUDistanceCache()
    ab = cache.get_or_compute(1.0, 2.0, 3.0, 4.0)
    ba = cache.get_or_compute(3.0, 4.0, 1.0, 2.0)
    assert len(cache) == 2
    assert math.isclose(ab, ba, abs_tol=1e-9)


def test_make_key_uses_precision():
    cache = LRUDistanceCache(precision=2)
    assert cache.make_key(1.2345, 2.3456, 3.4567, 4.5678) == (1.23, 2.35, 3.46, 4.57)
    assert (1.23, 2.35, 3.46, 4.57) not in cache


# ─── Capacity / eviction ─────────────────────────────────────────────


def test_size_never_exceeds_capacity():
    cache = LRUDistanceCache(capacity=10)
    _fill(cache, 25)
    assert len(cache) == 10


def test_default_capacity_bound():
    cache = LRUDistanceCache()
    assert cache.capacity == 1000
    _fill(cache, 1000)
    assert len(cache) == 1000
    _fill(cache, 1, start=1000)
    assert len(cache) == 1000
    assert _key(0) not in cache
    assert _key(1000) in cache


def test_evicts_least_recently_inserted():
    cache = LRUDistanceCache(capacity=3)
    _fill(cache, 3)
    _fill(cache, 1, start=3)
    assert cache.keys() == [_key(1), _key(2), _key(3)]


def test_hit_refreshes_recency():
    cache = LRUDistanceCache(capacity=3)
    _fill(cache, 3)
    # touch key 0 → key 1 becomes LRU
    cache.get_or_compute(0.0, 0.0, 0.0, 1.0)
    _fill(cache, 1, start=3)
    assert _key(0) in cache
    assert _key(1) not in cache
    assert cache.keys() == [_key(2), _key(0), _key(3)]


def test_capacity_one():
    cache = LRUDistanceCache(capacity=1)
    _fill(cache, 2)
    assert cache.keys() == [_key(1)]


@pytest.mark.parametrize("capacity", [0, -5])
def test_invalid_capacity_raises(capacity):
    with pytest.raises(ValueError, match="capacity"):
        LRUDistanceCache(capacity=capacity)


def test_negative_precision_raises():
    with pytest.raises(ValueError, match="precision"):
        LRUDistanceCache(precision=-1)


# ─── clear / prune / stats ───────────────────────────────────────────


def test_clear():
    cache = LRUDistanceCache(capacity=10)
    _fill(cache, 4)
    assert cache.clear() == 4
    assert len(cache) == 0
    assert cache.stats().misses == 0


def test_prune_below_threshold_is_noop():
    cache = LRUDistanceCache(capacity=10)
    _fill(cache, 8)
    assert cache.prune() == 0
    assert len(cache) == 8


def test_prune_drops_oldest_quarter():
    cache = LRUDistanceCache(capacity=10)
    _fill(cache, 9)
    # floor(10 * 0.25) = 2 oldest go
    assert cache.prune() == 2
    assert cache.keys() == [_key(i) for i in range(2, 9)]


def test_prune_custom_fraction():
    cache = LRUDistanceCache(capacity=100)
    _fill(cache, 60)
    assert cache.prune(threshold=0.5, fraction=0.5) == 50
    assert len(cache) == 10


def test_stats():
    cache = LRUDistanceCache(capacity=5)
    _fill(cache, 2)
    cache.get_or_compute(0.0, 0.0, 0.0, 1.0)
    stats = cache.stats()
    assert (stats.size, stats.capacity, stats.hits, stats.misses) == (2, 5, 1, 2)
    assert stats.hit_ratio == pytest.approx(1 / 3)


def test_stats_hit_ratio_empty():
    assert LRUDistanceCache().stats().hit_ratio == 0.0


# ─── DirectDistance ──────────────────────────────────────────────────


def test_direct_distance_has_no_memory():
    direct = DirectDistance()
    direct.get_or_compute(1.0, 2.0, 3.0, 4.0)
    assert len(direct) == 0
    assert direct.clear() == 0
