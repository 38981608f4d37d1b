"""Port interface for pairwise distance lookups used by the clustering engine."""

from abc import ABC, abstractmethod


class DistancePort(ABC):
    @abstractmethod
    def get_or_compute(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Return the great-circle distance in km between two coordinates.

        Implementations may memoize, but must return the same value a direct
        haversine computation would.
        """
        ...

    def clear(self) -> int:
        """Drop memoized entries. Returns how many were dropped."""
        return 0

    def __len__(self) -> int:
        return 0
