from __future__ import annotations
from math import asin, cos, radians, sin, sqrt
from typing import Protocol

"""
Geospatial helpers.

We keep a tiny geometry layer here so ranking and display code can do distance
calculations without pulling in heavier GIS dependencies.
"""

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


class LatLon(Protocol):
    """Anything carrying a latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def distance_km(a: LatLon, b: LatLon) -> float:
    """Compute great-circle (haversine) distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * asin(sqrt(h))


def km_to_miles(km: float) -> float:
    """Convert kilometers to miles (display only)."""
    return km * KM_TO_MILES
