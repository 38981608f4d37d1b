"""Render items — what the map layer draws: single markers or merged clusters."""

from dataclasses import dataclass, field

from geocluster.domain.value_objects.enums import RenderKind
from geocluster.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class Singleton:
    point: GeoPoint
    kind: RenderKind = field(default=RenderKind.SINGLETON, init=False)

    @property
    def id(self) -> str:
        return self.point.id

    @property
    def latitude(self) -> float:
        return self.point.latitude

    @property
    def longitude(self) -> float:
        return self.point.longitude

    @property
    def count(self) -> int:
        return 1

    @property
    def members(self) -> tuple[GeoPoint, ...]:
        return (self.point,)


@dataclass(frozen=True)
class Cluster:
    id: str
    centroid_latitude: float
    centroid_longitude: float
    label: str
    members: tuple[GeoPoint, ...]
    kind: RenderKind = field(default=RenderKind.CLUSTER, init=False)

    @property
    def latitude(self) -> float:
        return self.centroid_latitude

    @property
    def longitude(self) -> float:
        return self.centroid_longitude

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def seed(self) -> GeoPoint:
        return self.members[0]


RenderItem = Singleton | Cluster
