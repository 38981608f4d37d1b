"""Health check endpoint."""

from fastapi import APIRouter, Depends

from geocluster.adapters.cache.lru_distance_cache import LRUDistanceCache
from geocluster.infrastructure.api.dependencies import get_distance_cache

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(cache: LRUDistanceCache = Depends(get_distance_cache)):
    """Liveness plus current distance cache occupancy."""
    return {
        "status": "ok",
        "service": "GeoCluster - map marker clustering",
        "cache_size": len(cache),
        "cache_capacity": cache.capacity,
    }
