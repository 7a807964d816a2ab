"""Geodesy Bounded Context - Domain Services.

Pure spherical-earth calculations. NO I/O.

Distances use the haversine formula on a sphere of mean Earth radius; they
differ from WGS84 geodesic distances by up to ~0.5%.
"""

from __future__ import annotations

import math

from domain.geodesy.value_objects import GeoArea, GeoPoint

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EARTH_RADIUS_M = 6_371_000.0  # Mean Earth radius in meters
M2_PER_KM2 = 1_000_000.0


# ---------------------------------------------------------------------------
# Haversine Distance
# ---------------------------------------------------------------------------
def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in meters.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in meters. Zero for coincident points, symmetric in its
        arguments. Non-finite inputs yield NaN; callers validate upstream.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_between(start: GeoPoint, end: GeoPoint) -> float:
    """Haversine distance between two GeoPoints in meters."""
    return haversine_distance(
        start.latitude, start.longitude, end.latitude, end.longitude
    )


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------
def rectangle_area_km2(area: GeoArea) -> float:
    """Approximate surface area of a lat/lon rectangle in km².

    Multiplies the north-south extent (measured along the western edge) by the
    east-west extent (measured along the southern edge).
    """
    sw = area.south_west
    ne = area.north_east

    lat_distance = haversine_distance(
        sw.latitude, sw.longitude, ne.latitude, sw.longitude
    )
    lng_distance = haversine_distance(
        sw.latitude, sw.longitude, sw.latitude, ne.longitude
    )
    return (lat_distance * lng_distance) / M2_PER_KM2
