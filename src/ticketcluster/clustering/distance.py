"""
Great-circle distances between ticket locations.

Distances are computed with the `haversine` package as a central angle and scaled
by a fixed Earth radius of 6371 km, so results match the scheduling dashboard
regardless of the package's own default radius.
"""
from typing import Sequence, Tuple

import numpy as np
from haversine import Unit, haversine, haversine_vector

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distance in kilometers between two points given in decimal degrees.

    No range checks are performed: out-of-range or NaN coordinates produce a
    meaningless number rather than an error.
    """
    angle = haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS, check=False)
    return EARTH_RADIUS_KM * angle


def haversine_km_from(
    origin: Tuple[float, float],
    points: Sequence[Tuple[float, float]]
) -> np.ndarray:
    """Vectorized distances (km) from `origin` to every point in `points`."""
    if len(points) == 0:
        return np.zeros(0, dtype=float)
    origins = np.tile(np.asarray(origin, dtype=float), (len(points), 1))
    angles = haversine_vector(
        origins,
        np.asarray(points, dtype=float),
        unit=Unit.RADIANS,
        check=False
    )
    return EARTH_RADIUS_KM * np.asarray(angles, dtype=float)
