"""
Geographic <-> UTM on the WGS84 ellipsoid.

Forward and inverse Transverse Mercator use the series given by Snyder,
"Map Projections - A Working Manual" (USGS PP 1395), pp. 60-64. The meridian
arc keeps terms through sin(6 phi) and the easting/northing expansions
through A^5 / A^6; shorter series drift by metres toward the zone edges.
The inverse stays within 1e-6 deg across the regular 6 deg zones; the widened
Svalbard zones reach 6 deg from the central meridian, where the round trip
grows to about 1.2e-6 deg.
"""
from __future__ import annotations

import logging
import math
from typing import Tuple, Union

import numpy as np

from tacgrid.errors import UnsupportedZone
from tacgrid.models import GeographicCoordinate, Hemisphere, UTMCoordinate

logger = logging.getLogger(__name__)

# WGS84
A = 6378137.0
F = 1.0 / 298.257223563
E2 = 2 * F - F * F
EP2 = E2 / (1.0 - E2)
K0 = 0.9996

FALSE_EASTING = 500_000.0
FALSE_NORTHING_SOUTH = 10_000_000.0

MIN_LATITUDE = -80.0
MAX_LATITUDE = 84.0

# Meridian arc coefficients (Snyder 3-21)
_M1 = 1 - E2 / 4 - 3 * E2**2 / 64 - 5 * E2**3 / 256
_M2 = 3 * E2 / 8 + 3 * E2**2 / 32 + 45 * E2**3 / 1024
_M3 = 15 * E2**2 / 256 + 45 * E2**3 / 1024
_M4 = 35 * E2**3 / 3072

# Footpoint latitude coefficients (Snyder 3-26)
_E1 = (1 - math.sqrt(1 - E2)) / (1 + math.sqrt(1 - E2))
_P2 = 3 * _E1 / 2 - 27 * _E1**3 / 32
_P4 = 21 * _E1**2 / 16 - 55 * _E1**4 / 32
_P6 = 151 * _E1**3 / 96

CoordinateLike = Union[GeographicCoordinate, Tuple[float, float]]


def as_coordinate(value: CoordinateLike) -> GeographicCoordinate:
    """Accepts a GeographicCoordinate or a (latitude, longitude) pair."""
    if isinstance(value, GeographicCoordinate):
        return value
    lat, lon = value
    return GeographicCoordinate(float(lat), float(lon))


def check_utm_coverage(latitude: float) -> None:
    if not MIN_LATITUDE <= latitude < MAX_LATITUDE:
        raise UnsupportedZone(
            f"Latitude {latitude} is outside UTM coverage [{MIN_LATITUDE}, {MAX_LATITUDE})"
        )


def utm_zone(latitude: float, longitude: float) -> int:
    """
    Zone number covering (latitude, longitude), including the irregular
    zones around southern Norway (32V) and Svalbard (31X/33X/35X/37X).
    """
    zone = int(math.floor((longitude + 180.0) / 6.0)) + 1
    if zone > 60:
        # longitude == 180 belongs to the last zone
        zone = 60

    if 56.0 <= latitude < 64.0 and 3.0 <= longitude < 12.0:
        logger.debug("Norway exception: zone %d -> 32 at (%s, %s)", zone, latitude, longitude)
        zone = 32

    if 72.0 <= latitude < 84.0:
        for lo, hi, svalbard_zone in ((0.0, 9.0, 31), (9.0, 21.0, 33), (21.0, 33.0, 35), (33.0, 42.0, 37)):
            if lo <= longitude < hi:
                if zone != svalbard_zone:
                    logger.debug(
                        "Svalbard exception: zone %d -> %d at (%s, %s)",
                        zone, svalbard_zone, latitude, longitude,
                    )
                zone = svalbard_zone
                break

    return zone


def central_meridian(zone: int) -> float:
    return float((zone - 1) * 6 - 180 + 3)


def meridian_arc(phi):
    """Distance along the meridian from the equator to latitude phi (radians)."""
    return A * (
        _M1 * phi
        - _M2 * np.sin(2 * phi)
        + _M3 * np.sin(4 * phi)
        - _M4 * np.sin(6 * phi)
    )


def to_utm(coordinate: CoordinateLike) -> UTMCoordinate:
    coord = as_coordinate(coordinate)
    check_utm_coverage(coord.latitude)

    zone = utm_zone(coord.latitude, coord.longitude)
    lon0 = np.radians(central_meridian(zone))
    lat = np.radians(coord.latitude)
    lon = np.radians(coord.longitude)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    tan_lat = np.tan(lat)

    N = A / np.sqrt(1 - E2 * sin_lat**2)
    T = tan_lat**2
    C = EP2 * cos_lat**2
    A_ = cos_lat * (lon - lon0)
    M = meridian_arc(lat)

    easting = K0 * N * (
        A_
        + (1 - T + C) * A_**3 / 6
        + (5 - 18 * T + T**2 + 72 * C - 58 * EP2) * A_**5 / 120
    ) + FALSE_EASTING

    northing = K0 * (
        M
        + N * tan_lat * (
            A_**2 / 2
            + (5 - T + 9 * C + 4 * C**2) * A_**4 / 24
            + (61 - 58 * T + T**2 + 600 * C - 330 * EP2) * A_**6 / 720
        )
    )

    if coord.latitude < 0:
        northing += FALSE_NORTHING_SOUTH

    hemisphere = Hemisphere.NORTH if coord.latitude >= 0 else Hemisphere.SOUTH
    return UTMCoordinate(zone=zone, hemisphere=hemisphere, easting=float(easting), northing=float(northing))


def from_utm(utm: UTMCoordinate) -> GeographicCoordinate:
    x = utm.easting - FALSE_EASTING
    y = utm.northing
    if utm.hemisphere is Hemisphere.SOUTH:
        y -= FALSE_NORTHING_SOUTH

    M = y / K0
    mu = M / (A * _M1)
    phi1 = (
        mu
        + _P2 * np.sin(2 * mu)
        + _P4 * np.sin(4 * mu)
        + _P6 * np.sin(6 * mu)
    )

    sin_phi1 = np.sin(phi1)
    cos_phi1 = np.cos(phi1)
    tan_phi1 = np.tan(phi1)

    N1 = A / np.sqrt(1 - E2 * sin_phi1**2)
    T1 = tan_phi1**2
    C1 = EP2 * cos_phi1**2
    R1 = A * (1 - E2) / (1 - E2 * sin_phi1**2) ** 1.5
    D = x / (N1 * K0)

    lat = phi1 - (N1 * tan_phi1 / R1) * (
        D**2 / 2
        - (5 + 3 * T1 + 10 * C1 - 4 * C1**2 - 9 * EP2) * D**4 / 24
        + (61 + 90 * T1 + 298 * C1 + 45 * T1**2 - 252 * EP2 - 3 * C1**2) * D**6 / 720
    )
    lon = (
        D
        - (1 + 2 * T1 + C1) * D**3 / 6
        + (5 - 2 * C1 + 28 * T1 - 3 * C1**2 + 8 * EP2 + 24 * T1**2) * D**5 / 120
    ) / cos_phi1

    latitude = float(np.degrees(lat))
    longitude = float(np.degrees(lon)) + central_meridian(utm.zone)
    if abs(longitude) > 180.0:
        sign = math.copysign(1.0, longitude)
        if abs(longitude) - 180.0 < 1e-7:
            # rounding noise on the antimeridian
            longitude = sign * 180.0
        else:
            longitude -= sign * 360.0

    return GeographicCoordinate(latitude, longitude)
