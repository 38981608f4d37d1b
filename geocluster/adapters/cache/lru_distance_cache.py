"""Bounded LRU memo over the haversine distance.

Keys are coordinates rounded to a fixed number of decimals, so redraws of
visually identical positions hit the same entry. The cache is not
thread-safe; callers sharing it across threads must serialize access.
"""

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from dataclasses import dataclass

from geocluster.application.ports.distance_port import DistancePort
from geocluster.domain.value_objects.geo_point import EARTH_RADIUS_KM, haversine_km

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000
DEFAULT_PRECISION = 6  # ~0.11 m

CacheKey = tuple[float, float, float, float]


@dataclass(frozen=True)
class CacheStats:
    size: int
    capacity: int
    hits: int
    misses: int

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class LRUDistanceCache(DistancePort):
    """Memoizes distances by quantized coordinate 4-tuple, evicting the LRU entry."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        precision: int = DEFAULT_PRECISION,
        earth_radius_km: float = EARTH_RADIUS_KM,
    ):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        if precision < 0:
            raise ValueError(f"Rounding precision must be non-negative, got {precision}")
        self._capacity = capacity
        self._precision = precision
        self._earth_radius_km = earth_radius_km
        self._entries: OrderedDict[CacheKey, float] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def make_key(self, lat1: float, lon1: float, lat2: float, lon2: float) -> CacheKey:
        p = self._precision
        return (round(lat1, p), round(lon1, p), round(lat2, p), round(lon2, p))

    def get_or_compute(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        key = self.make_key(lat1, lon1, lat2, lon2)

        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            return cached

        self.misses += 1
        distance = haversine_km(lat1, lon1, lat2, lon2, self._earth_radius_km)
        self._entries[key] = distance

        if len(self._entries) > self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Distance cache full (%d), evicted %s", self._capacity, evicted)

        return distance

    def clear(self) -> int:
        cleared = len(self._entries)
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        logger.debug("Distance cache cleared (%d entries)", cleared)
        return cleared

    def prune(self, threshold: float = 0.8, fraction: float = 0.25) -> int:
        """Drop the oldest ``fraction * capacity`` entries once above ``threshold * capacity``.

        Returns the number of entries removed.
        """
        if len(self._entries) <= self._capacity * threshold:
            return 0

        to_remove = min(math.floor(self._capacity * fraction), len(self._entries))
        for _ in range(to_remove):
            self._entries.popitem(last=False)

        logger.debug("Distance cache pruned %d entries, %d left", to_remove, len(self._entries))
        return to_remove

    def stats(self) -> CacheStats:
        return CacheStats(
            size=len(self._entries),
            capacity=self._capacity,
            hits=self.hits,
            misses=self.misses,
        )

    def keys(self) -> list[CacheKey]:
        """Keys from least to most recently used."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class DirectDistance(DistancePort):
    """No memoization: every lookup runs the haversine formula."""

    def __init__(self, earth_radius_km: float = EARTH_RADIUS_KM):
        self._earth_radius_km = earth_radius_km

    def get_or_compute(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        return haversine_km(lat1, lon1, lat2, lon2, self._earth_radius_km)
