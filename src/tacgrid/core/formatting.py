from __future__ import annotations

import logging
import math
from typing import Optional, Union

from tacgrid.angles import decimal_to_dms
from tacgrid.core.mgrs import latitude_band, to_mgrs
from tacgrid.core.utm import CoordinateLike, as_coordinate, to_utm
from tacgrid.errors import GridConversionError
from tacgrid.models import CoordinateFormat, GridConfig

logger = logging.getLogger(__name__)


def format_utm(coordinate: CoordinateLike) -> str:
    """``"18S 326555 4318713"``: zone, band letter, whole metres."""
    coord = as_coordinate(coordinate)
    utm = to_utm(coord)
    return (
        f"{utm.zone}{latitude_band(coord.latitude)} "
        f"{int(math.floor(utm.easting))} {int(math.floor(utm.northing))}"
    )


def format_decimal_degrees(coordinate: CoordinateLike) -> str:
    coord = as_coordinate(coordinate)
    lat_hem = "N" if coord.latitude >= 0 else "S"
    lon_hem = "E" if coord.longitude >= 0 else "W"
    return f"{abs(coord.latitude):.6f}° {lat_hem}, {abs(coord.longitude):.6f}° {lon_hem}"


def _dms(value: float, positive: str, negative: str) -> str:
    deg, minute, sec = decimal_to_dms(value)
    return f"{deg}°{minute:02d}'{sec:05.2f}\"{positive if value >= 0 else negative}"


def format_dms(coordinate: CoordinateLike) -> str:
    coord = as_coordinate(coordinate)
    return f"{_dms(coord.latitude, 'N', 'S')} {_dms(coord.longitude, 'E', 'W')}"


def format_coordinate(
    coordinate: CoordinateLike,
    fmt: Union[CoordinateFormat, str] = CoordinateFormat.MGRS,
    precision: int = 5,
) -> str:
    """Display string for a coordinate in one of the supported formats."""
    fmt = CoordinateFormat(fmt)
    if fmt is CoordinateFormat.MGRS:
        return to_mgrs(coordinate, precision)
    if fmt is CoordinateFormat.UTM:
        return format_utm(coordinate)
    if fmt is CoordinateFormat.DECIMAL_DEGREES:
        return format_decimal_degrees(coordinate)
    return format_dms(coordinate)


def safe_format(
    coordinate: Union[CoordinateLike, None],
    fmt: Union[CoordinateFormat, str] = CoordinateFormat.MGRS,
    placeholder: str = "Grid",
    precision: int = 5,
) -> str:
    """
    Like format_coordinate, but a coordinate that cannot be converted (or no
    coordinate at all) yields ``placeholder`` for display.
    """
    if coordinate is None:
        return placeholder
    try:
        return format_coordinate(coordinate, fmt, precision)
    except GridConversionError as e:
        logger.debug("Cannot format %r as %s: %s", coordinate, fmt, e)
        return placeholder


def format_with_config(coordinate: Union[CoordinateLike, None], config: Optional[GridConfig] = None) -> str:
    """safe_format using the format, precision and placeholder of a GridConfig."""
    config = config or GridConfig()
    return safe_format(coordinate, config.coordinate_format, config.placeholder, config.precision)
