"""Great-circle distance helpers."""

from __future__ import annotations

import math
from typing import Iterable

from railtrack.data.models import LatLng

EARTH_RADIUS_KM = 6371.0


def distance_km(a: LatLng, b: LatLng) -> float:
    """Haversine distance in kilometres between two (lat, lng) pairs."""
    lat1, lat2 = math.radians(a[0]), math.radians(b[0])
    dlat = lat2 - lat1
    dlng = math.radians(b[1] - a[1])
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # rounding can push h a hair past 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(h, 1.0)))

def path_distance_km(points: Iterable[LatLng]) -> float:
    """Sum of consecutive segment distances; 0 for fewer than two points."""
    total = 0.0
    previous = None
    for point in points:
        if previous is not None:
            total += distance_km(previous, point)
        previous = point
    return total

__all__ = ["EARTH_RADIUS_KM", "distance_km", "path_distance_km"]
