"""Pytest configuration and shared fixtures."""

import pytest

from geocluster.domain.value_objects.geo_point import GeoPoint


@pytest.fixture
def paris_points():
    """Two markers ~14 m apart near Hôtel de Ville, one several km east."""
    return [
        GeoPoint(id="a", latitude=48.8566, longitude=2.3522, title="Vélo", category="sport"),
        GeoPoint(id="b", latitude=48.8567, longitude=2.3523, title="Lampe", category="maison"),
        GeoPoint(id="c", latitude=48.8700, longitude=2.4000, title="Livres", category="culture"),
    ]


@pytest.fixture
def spread_points():
    """60 markers on a line ~1.1 km apart: never within any clustering radius."""
    return [
        GeoPoint(id=f"p{i}", latitude=45.0 + i * 0.01, longitude=5.0, title=f"Objet {i}")
        for i in range(60)
    ]
