"""GeoPoint value object — an immutable map marker, plus the haversine distance."""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


class InvalidCoordinateError(ValueError):
    """Raised at ingestion when a marker has unusable coordinates."""


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Great-circle distance in km between two (lat, lon) pairs given in degrees.

    Total over finite input: no validation is done here, out-of-range values
    just produce a meaningless distance.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlon / 2) ** 2
    )
    # rounding can push a just past 1 for antipodal pairs
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return earth_radius_km * c


@dataclass(frozen=True)
class GeoPoint:
    id: str
    latitude: float
    longitude: float
    title: str = ""
    category: str | None = None

    def distance_km(self, other: "GeoPoint") -> float:
        return haversine_km(self.latitude, self.longitude, other.latitude, other.longitude)

    def is_valid(self) -> bool:
        """True when both coordinates are finite and inside the WGS84 ranges."""
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            return False
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def ensure_valid(self) -> "GeoPoint":
        """Return self, or raise InvalidCoordinateError.

        Only meant for boundaries where markers enter the system (CSV, API).
        """
        if not self.is_valid():
            raise InvalidCoordinateError(
                f"Marker {self.id!r} has invalid coordinates "
                f"({self.latitude}, {self.longitude})"
            )
        return self
