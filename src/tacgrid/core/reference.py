"""
Cross-check of the built-in Transverse Mercator series against PROJ.

PROJ's UTM uses the exact (Poder/Engsager) formulation, so inside a zone the
two should agree to well under a centimetre.
"""
from __future__ import annotations

import math
from functools import lru_cache
from typing import Optional, Tuple

from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError

from tacgrid.core.utm import CoordinateLike, as_coordinate, check_utm_coverage, to_utm, utm_zone
from tacgrid.models import Hemisphere


@lru_cache(maxsize=None)
def _transformer(zone: int, hemisphere: Hemisphere) -> Transformer:
    src_crs = CRS("EPSG:4326")  # WGS84
    prefix = 326 if hemisphere is Hemisphere.NORTH else 327
    dst_crs = CRS(f"EPSG:{prefix}{zone:02d}")
    return Transformer.from_crs(src_crs, dst_crs, always_xy=True)


def reference_utm(coordinate: CoordinateLike, zone: Optional[int] = None) -> Tuple[float, float]:
    """
    (easting, northing) computed by PROJ for the coordinate, in ``zone`` or
    in the zone tacgrid would pick.
    """
    coord = as_coordinate(coordinate)
    check_utm_coverage(coord.latitude)
    if zone is None:
        zone = utm_zone(coord.latitude, coord.longitude)
    hemisphere = Hemisphere.NORTH if coord.latitude >= 0 else Hemisphere.SOUTH

    try:
        easting, northing = _transformer(zone, hemisphere).transform(coord.longitude, coord.latitude)
    except ProjError as e:
        raise RuntimeError(f"UTM Projection failed: {e}")
    return float(easting), float(northing)


def projection_deviation(coordinate: CoordinateLike) -> float:
    """Planar distance in metres between tacgrid's and PROJ's UTM position."""
    utm = to_utm(coordinate)
    easting, northing = reference_utm(coordinate, utm.zone)
    return math.hypot(utm.easting - easting, utm.northing - northing)
