"""Spherical distance and bearing between geographic coordinates."""
from __future__ import annotations

import math

from tacgrid.core.utm import CoordinateLike, as_coordinate

EARTH_RADIUS_M = 6_371_000.0


def distance_m(start: CoordinateLike, end: CoordinateLike) -> float:
    """Great-circle (haversine) distance in metres."""
    p1 = as_coordinate(start)
    p2 = as_coordinate(end)
    lat1, lon1, lat2, lon2 = map(math.radians, [p1.latitude, p1.longitude, p2.latitude, p2.longitude])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def bearing_deg(start: CoordinateLike, end: CoordinateLike) -> float:
    """Initial bearing from start to end, degrees clockwise from north (0-360)."""
    p1 = as_coordinate(start)
    p2 = as_coordinate(end)
    lat1, lon1, lat2, lon2 = map(math.radians, [p1.latitude, p1.longitude, p2.latitude, p2.longitude])
    dlon = lon2 - lon1
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{int(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_bearing(degrees: float) -> str:
    """Whole degrees, zero padded; 359.7 rounds to 000."""
    return f"{round(degrees) % 360:03d}°"
