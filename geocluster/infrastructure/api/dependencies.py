"""FastAPI dependency injection — wires the distance cache into the clustering use case."""

from __future__ import annotations

import threading

from fastapi import Depends

from geocluster.adapters.cache.lru_distance_cache import LRUDistanceCache
from geocluster.application.use_cases.cluster_markers import ClusterMarkersUseCase
from geocluster.config import settings
from geocluster.domain.policies.clustering import ClusteringParams

# One cache per process, shared by every clustering pass so panning and
# zooming reuse earlier distances. Sync routes run in a threadpool, so all
# access goes through cache_lock.
_distance_cache = LRUDistanceCache(
    capacity=settings.distance_cache_capacity,
    precision=settings.distance_cache_precision,
    earth_radius_km=settings.earth_radius_km,
)
_params = ClusteringParams.from_settings(settings)

cache_lock = threading.Lock()


def get_distance_cache() -> LRUDistanceCache:
    return _distance_cache


def get_clustering_params() -> ClusteringParams:
    return _params


def get_cluster_markers_uc(
    cache: LRUDistanceCache = Depends(get_distance_cache),
    params: ClusteringParams = Depends(get_clustering_params),
) -> ClusterMarkersUseCase:
    return ClusterMarkersUseCase(distance=cache, params=params)
