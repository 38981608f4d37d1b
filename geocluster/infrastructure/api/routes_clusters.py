"""Clustering endpoints — cluster a marker set, inspect and reset the distance cache."""

from __future__ import annotations

import dataclasses
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from geocluster.adapters.cache.lru_distance_cache import LRUDistanceCache
from geocluster.application.use_cases.cluster_markers import ClusterMarkersUseCase
from geocluster.domain.entities.render_item import Cluster, RenderItem
from geocluster.domain.value_objects.geo_point import GeoPoint
from geocluster.infrastructure.api.dependencies import (
    cache_lock,
    get_cluster_markers_uc,
    get_distance_cache,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clusters", tags=["clusters"])

# ── Request schemas ─────────────────────────────────────────────────

class MarkerIn(BaseModel):
    id: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    title: str = ""
    category: str | None = None

    def to_point(self) -> GeoPoint:
        return GeoPoint(
            id=self.id,
            latitude=self.latitude,
            longitude=self.longitude,
            title=self.title,
            category=self.category,
        )


class ClusterRequest(BaseModel):
    zoom: float = Field(ge=0, le=24)
    points: list[MarkerIn]
    enable_clustering: bool = True


# ── Endpoints ───────────────────────────────────────────────────────

@router.post("")
def cluster_markers(
    body: ClusterRequest,
    uc: ClusterMarkersUseCase = Depends(get_cluster_markers_uc),
):
    """Cluster the given markers for a zoom level."""
    points = [m.to_point() for m in body.points]
    if not body.enable_clustering:
        uc = uc.with_params(dataclasses.replace(uc.params, enabled=False))

    try:
        with cache_lock:
            result = uc.cluster_with_stats(points, body.zoom)
    except Exception as e:
        logger.exception("Error clustering %d markers", len(points))
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "items": [_serialize_item(item) for item in result.items],
        "stats": dataclasses.asdict(result.stats),
        "radius_km": result.radius_km,
        "skipped": result.skipped,
    }


@router.get("/cache")
def cache_stats(cache: LRUDistanceCache = Depends(get_distance_cache)):
    """Distance cache occupancy and hit ratio."""
    with cache_lock:
        stats = cache.stats()
    return {**dataclasses.asdict(stats), "hit_ratio": round(stats.hit_ratio, 4)}


@router.delete("/cache")
def clear_cache(cache: LRUDistanceCache = Depends(get_distance_cache)):
    """Drop every memoized distance."""
    with cache_lock:
        cleared = cache.clear()
    logger.info("Distance cache cleared via API (%d entries)", cleared)
    return {"status": "ok", "cleared": cleared}


@router.post("/cache/prune")
def prune_cache(cache: LRUDistanceCache = Depends(get_distance_cache)):
    """Drop the oldest quarter of the cache when it is more than 80% full."""
    with cache_lock:
        removed = cache.prune()
    return {"status": "ok", "removed": removed}


def _serialize_point(p: GeoPoint) -> dict:
    return {
        "id": p.id,
        "latitude": p.latitude,
        "longitude": p.longitude,
        "title": p.title,
        "category": p.category,
    }


def _serialize_item(item: RenderItem) -> dict:
    """Flatten a Singleton or Cluster into the shape the map layer draws."""
    if isinstance(item, Cluster):
        return {
            "kind": item.kind.value,
            "id": item.id,
            "latitude": item.centroid_latitude,
            "longitude": item.centroid_longitude,
            "title": item.label,
            "category": "cluster",
            "count": item.count,
            "members": [_serialize_point(m) for m in item.members],
        }

    return {
        "kind": item.kind.value,
        **_serialize_point(item.point),
        "count": 1,
        "members": [],
    }
