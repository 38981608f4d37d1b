"""ClusteringPolicy — zoom-dependent skip/radius rules and greedy seed grouping."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from geocluster.domain.entities.render_item import Cluster, RenderItem, Singleton
from geocluster.domain.value_objects.geo_point import GeoPoint

DistanceFn = Callable[[GeoPoint, GeoPoint], float]


@dataclass(frozen=True)
class ClusteringParams:
    """Tunables of one clustering pass. Defaults reproduce the map widget's behaviour."""

    min_points: int = 50
    max_zoom: float = 12
    base_radius_km: float = 0.1
    radius_zoom_offset: float = 8
    radius_floor_km: float = 0.01
    label_template: str = "{count} objets"
    enabled: bool = True

    @classmethod
    def from_settings(cls, settings) -> ClusteringParams:
        return cls(
            min_points=settings.cluster_min_points,
            max_zoom=settings.cluster_max_zoom,
            base_radius_km=settings.cluster_base_radius_km,
            radius_zoom_offset=settings.cluster_radius_zoom_offset,
            radius_floor_km=settings.cluster_radius_floor_km,
            label_template=settings.cluster_label_template,
            enabled=settings.clustering_enabled,
        )


def should_skip_clustering(point_count: int, zoom: float, params: ClusteringParams) -> bool:
    """Clustering is pointless for sparse sets or zoomed-in views."""
    if not params.enabled:
        return True
    return point_count <= params.min_points or zoom > params.max_zoom


def cluster_radius_km(zoom: float, params: ClusteringParams) -> float:
    """Grouping radius: halves with every zoom level above the offset, floored.

    zoom 8 → 0.1 km, zoom 10 → 0.025 km, zoom 12 → 0.01 km (floor).
    Far-out zooms give an infinite radius, far-in zooms the floor.
    """
    try:
        radius = params.base_radius_km * 2.0 ** (params.radius_zoom_offset - zoom)
    except OverflowError:
        radius = math.inf
    return max(params.radius_floor_km, radius)


def as_singletons(points: Iterable[GeoPoint]) -> list[RenderItem]:
    return [Singleton(point=p) for p in points]


def make_cluster(members: Sequence[GeoPoint], label_template: str) -> Cluster:
    """Build a Cluster whose centroid is the plain mean of member lat and lon."""
    count = len(members)
    avg_lat = sum(m.latitude for m in members) / count
    avg_lon = sum(m.longitude for m in members) / count
    return Cluster(
        id=f"cluster-{members[0].id}",
        centroid_latitude=avg_lat,
        centroid_longitude=avg_lon,
        label=label_template.format(count=count),
        members=tuple(members),
    )


def group_points(
    points: Sequence[GeoPoint],
    radius_km: float,
    distance: DistanceFn,
    label_template: str = ClusteringParams.label_template,
) -> list[RenderItem]:
    """Single-pass greedy grouping around seeds, in input order.

    1. The first unprocessed point becomes a seed.
    2. Every later unprocessed point within *radius_km* of the seed joins it.
    3. Groups of two or more become a Cluster, lone seeds a Singleton.

    Distances are always seed-to-candidate, so a point joins the first seed
    that reaches it even if a later seed is closer. Reordering the input can
    change the output.
    """
    items: list[RenderItem] = []
    processed: set[str] = set()

    for i, seed in enumerate(points):
        if seed.id in processed:
            continue

        group = [seed]
        processed.add(seed.id)

        for candidate in points[i + 1:]:
            if candidate.id in processed:
                continue
            if distance(seed, candidate) <= radius_km:
                group.append(candidate)
                processed.add(candidate.id)

        if len(group) > 1:
            items.append(make_cluster(group, label_template))
        else:
            items.append(Singleton(point=seed))

    return items


def find_cluster(items: Iterable[RenderItem], cluster_id: str) -> Cluster | None:
    """Look up a cluster from a previous pass's output by its id."""
    return next(
        (item for item in items if isinstance(item, Cluster) and item.id == cluster_id),
        None,
    )
