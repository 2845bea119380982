import math

import numpy as np
import pytest

from ticketcluster.clustering.distance import EARTH_RADIUS_KM, haversine_km, haversine_km_from


def test_same_point_is_zero():
    assert haversine_km(51.5074, -0.1278, 51.5074, -0.1278) == 0.0


def test_distance_is_symmetric():
    there = haversine_km(40.7128, -74.0060, 34.0522, -118.2437)
    back = haversine_km(34.0522, -118.2437, 40.7128, -74.0060)
    assert there == pytest.approx(back)


@pytest.mark.parametrize("lat1, lon1, lat2, lon2, expected", [
    # One degree of longitude on the equator
    (0.0, 0.0, 0.0, 1.0, EARTH_RADIUS_KM * math.pi / 180),
    # Pole to pole
    (90.0, 0.0, -90.0, 0.0, EARTH_RADIUS_KM * math.pi),
    # New York to Los Angeles
    (40.7128, -74.0060, 34.0522, -118.2437, 3935.7),
    # London to Paris
    (51.5074, -0.1278, 48.8566, 2.3522, 343.5),
])
def test_known_distances(lat1, lon1, lat2, lon2, expected):
    assert haversine_km(lat1, lon1, lat2, lon2) == pytest.approx(expected, rel=1e-3)


def test_uses_fixed_earth_radius():
    # Quarter of the equator
    assert haversine_km(0.0, 0.0, 0.0, 90.0) == pytest.approx(EARTH_RADIUS_KM * math.pi / 2, rel=1e-9)


def test_out_of_range_coordinates_do_not_raise():
    # No range validation: a number comes back either way
    value = haversine_km(123.0, 400.0, -95.0, -200.0)
    assert isinstance(value, float)


def test_vectorized_matches_scalar():
    origin = (51.5074, -0.1278)
    points = [(51.5155, -0.0922), (53.4808, -2.2426), origin]
    distances = haversine_km_from(origin, points)

    assert isinstance(distances, np.ndarray)
    assert distances.shape == (3,)
    for point, distance in zip(points, distances):
        assert distance == pytest.approx(haversine_km(*origin, *point), abs=1e-9)
    assert distances[2] == pytest.approx(0.0, abs=1e-9)


def test_vectorized_empty():
    distances = haversine_km_from((0.0, 0.0), [])
    assert distances.shape == (0,)
