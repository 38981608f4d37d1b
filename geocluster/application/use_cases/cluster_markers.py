"""ClusterMarkersUseCase — decide which markers render alone and which merge."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from geocluster.application.ports.distance_port import DistancePort
from geocluster.domain.entities.render_item import Cluster, RenderItem
from geocluster.domain.policies.clustering import (
    ClusteringParams,
    as_singletons,
    cluster_radius_km,
    find_cluster,
    group_points,
    should_skip_clustering,
)
from geocluster.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusteringStats:
    """Summary of one clustering pass."""

    original_count: int
    processed_count: int
    cluster_count: int
    item_count: int
    reduction_percentage: int
    cache_size: int


@dataclass(frozen=True)
class ClusteringResult:
    items: list[RenderItem]
    stats: ClusteringStats
    radius_km: float | None  # None when clustering was skipped
    skipped: bool


class ClusterMarkersUseCase:
    """Runs clustering passes against a long-lived distance cache.

    One instance is meant to live as long as the map it serves, so the
    cache amortizes distance work across pan/zoom passes.
    """

    def __init__(self, distance: DistancePort, params: ClusteringParams | None = None):
        self._distance = distance
        self._params = params or ClusteringParams()

    @property
    def params(self) -> ClusteringParams:
        return self._params

    def with_params(self, params: ClusteringParams) -> ClusterMarkersUseCase:
        """Same distance cache, different tunables."""
        return ClusterMarkersUseCase(distance=self._distance, params=params)

    def execute(self, points: Sequence[GeoPoint], zoom: float) -> list[RenderItem]:
        """Cluster *points* for the given zoom level.

        Every input point ends up exactly once in the output, either as a
        Singleton or as a member of one Cluster.
        """
        return self.cluster_with_stats(points, zoom).items

    def cluster_with_stats(self, points: Sequence[GeoPoint], zoom: float) -> ClusteringResult:
        if should_skip_clustering(len(points), zoom, self._params):
            items = as_singletons(points)
            logger.debug(
                "Clustering skipped: %d points, zoom=%s (min_points=%d, max_zoom=%s)",
                len(points), zoom, self._params.min_points, self._params.max_zoom,
            )
            return ClusteringResult(
                items=items,
                stats=self._stats(len(points), items),
                radius_km=None,
                skipped=True,
            )

        radius = cluster_radius_km(zoom, self._params)
        items = group_points(points, radius, self._seed_distance, self._params.label_template)

        stats = self._stats(len(points), items)
        logger.debug(
            "Clustered %d points at zoom=%s (radius=%.4f km) → %d items (%d clusters)",
            len(points), zoom, radius, len(items), stats.cluster_count,
        )
        return ClusteringResult(items=items, stats=stats, radius_km=radius, skipped=False)

    def find_cluster(self, items: Sequence[RenderItem], cluster_id: str) -> Cluster | None:
        return find_cluster(items, cluster_id)

    def clear_cache(self) -> int:
        return self._distance.clear()

    def _seed_distance(self, seed: GeoPoint, candidate: GeoPoint) -> float:
        return self._distance.get_or_compute(
            seed.latitude, seed.longitude, candidate.latitude, candidate.longitude
        )

    def _stats(self, original_count: int, items: list[RenderItem]) -> ClusteringStats:
        cluster_count = sum(1 for item in items if isinstance(item, Cluster))
        processed_count = len(items)
        reduction = (
            round((original_count - processed_count) / original_count * 100)
            if original_count > 0
            else 0
        )
        return ClusteringStats(
            original_count=original_count,
            processed_count=processed_count,
            cluster_count=cluster_count,
            item_count=processed_count - cluster_count,
            reduction_percentage=reduction,
            cache_size=len(self._distance),
        )
