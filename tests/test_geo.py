from __future__ import annotations

import math

import pytest

from core import UNKNOWN_DISTANCE, GeoPoint
from ranking.geo import (
    LOCATION_UNAVAILABLE_NOTICE,
    distance_between,
    distance_km,
    parse_viewer_location,
)


_POINTS = [
    (34.0522, -118.2437),
    (34.0622, -118.2537),
    (40.7128, -74.0060),
    (-33.8688, 151.2093),
    (0.0, 179.9),
    (0.0, -179.9),
    (89.9, 10.0),
]


def test_distance_is_zero_for_identical_points() -> None:
    for lat, lng in _POINTS:
        assert distance_km(lat, lng, lat, lng) == 0.0


def test_distance_is_symmetric() -> None:
    for lat1, lng1 in _POINTS:
        for lat2, lng2 in _POINTS:
            forward = distance_km(lat1, lng1, lat2, lng2)
            backward = distance_km(lat2, lng2, lat1, lng1)
            assert forward >= 0.0
            assert math.isclose(forward, backward, rel_tol=1e-9, abs_tol=0.0)


def test_distance_matches_known_values() -> None:
    # Los Angeles to New York, roughly 3936 km on a 6371 km sphere.
    la_ny = distance_km(34.0522, -118.2437, 40.7128, -74.0060)
    assert 3900 < la_ny < 3970

    # One degree of latitude is ~111.19 km.
    assert distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=0.01)

    # Across the antimeridian stays short.
    assert distance_km(0.0, 179.9, 0.0, -179.9) == pytest.approx(22.24, abs=0.05)


def test_distance_rejects_non_finite_inputs() -> None:
    with pytest.raises(ValueError):
        distance_km(float("nan"), 0.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        distance_km(0.0, float("inf"), 0.0, 0.0)


def test_distance_between_missing_side_is_unknown() -> None:
    here = GeoPoint(latitude=34.0522, longitude=-118.2437)
    assert distance_between(None, here) == UNKNOWN_DISTANCE
    assert distance_between(here, None) == UNKNOWN_DISTANCE
    assert distance_between(None, None) == UNKNOWN_DISTANCE
    assert distance_between(here, here) == 0.0


def test_parse_viewer_location_valid_and_absent() -> None:
    point, notice = parse_viewer_location("34.05", "-118.24")
    assert point == GeoPoint(latitude=34.05, longitude=-118.24)
    assert notice is None

    point, notice = parse_viewer_location(None, None)
    assert point is None
    assert notice is None


@pytest.mark.parametrize(
    "lat,lng",
    [
        ("34.05", None),
        (None, "-118.24"),
        ("north", "west"),
        ("95", "10"),
        ("10", "200"),
        ("nan", "10"),
        ("inf", "10"),
    ],
)
def test_parse_viewer_location_degrades_to_global(lat, lng) -> None:
    point, notice = parse_viewer_location(lat, lng)
    assert point is None
    assert notice == LOCATION_UNAVAILABLE_NOTICE
