from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from tacgrid.errors import (
    InvalidLatitude,
    InvalidLongitude,
    InvalidPrecision,
    MalformedGridReference,
    OutOfRangeZoneNumber,
)


@dataclass(frozen=True)
class GeographicCoordinate:
    """
    WGS84 latitude/longitude in decimal degrees.

    latitude must lie in [-90, 90] and longitude in [-180, 180]. Whether the
    point is inside the UTM/MGRS coverage (80S..84N) is checked by the
    conversions, not here.
    """
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.latitude) or not -90.0 <= self.latitude <= 90.0:
            raise InvalidLatitude(f"Latitude out of range: {self.latitude!r}")
        if not math.isfinite(self.longitude) or not -180.0 <= self.longitude <= 180.0:
            raise InvalidLongitude(f"Longitude out of range: {self.longitude!r}")


class Hemisphere(str, Enum):
    NORTH = "N"
    SOUTH = "S"


@dataclass(frozen=True)
class UTMCoordinate:
    """
    UTM position.

    easting carries the 500 000 m false easting; northing is measured from the
    equator in the north and from a 10 000 000 m false origin in the south.
    """
    zone: int
    hemisphere: Hemisphere
    easting: float
    northing: float

    def __post_init__(self) -> None:
        if not 1 <= self.zone <= 60:
            raise OutOfRangeZoneNumber(f"UTM zone must be in 1..60, got {self.zone}")
        if not (math.isfinite(self.easting) and math.isfinite(self.northing)):
            raise MalformedGridReference(
                f"Non-finite easting/northing: {self.easting!r}, {self.northing!r}"
            )
        # Accept "N"/"S" strings from callers and normalise to the enum.
        object.__setattr__(self, "hemisphere", Hemisphere(self.hemisphere))


class CoordinateFormat(str, Enum):
    MGRS = "mgrs"
    UTM = "utm"
    DECIMAL_DEGREES = "dd"
    DMS = "dms"

    @property
    def display_name(self) -> str:
        return {
            CoordinateFormat.MGRS: "MGRS",
            CoordinateFormat.UTM: "UTM",
            CoordinateFormat.DECIMAL_DEGREES: "DD",
            CoordinateFormat.DMS: "DMS",
        }[self]

    @property
    def example(self) -> str:
        return {
            CoordinateFormat.MGRS: "18T WL 12345 67890",
            CoordinateFormat.UTM: "18T 512345 4367890",
            CoordinateFormat.DECIMAL_DEGREES: "39.456700° N, 77.123400° W",
            CoordinateFormat.DMS: "39°27'24.00\"N 77°07'24.00\"W",
        }[self]


def check_precision(precision: int) -> None:
    """MGRS digits per axis: an int (not bool) in 1..5."""
    if not isinstance(precision, int) or isinstance(precision, bool) or not 1 <= precision <= 5:
        raise InvalidPrecision(f"Precision must be an integer in 1..5, got {precision!r}")


@dataclass(frozen=True)
class GridConfig:
    """
    Display / batch conversion settings.

    precision:
      MGRS digits per axis, 1 (10 km) .. 5 (1 m).
    coordinate_format:
      format used when a single display string is needed.
    placeholder:
      text shown instead of a coordinate that cannot be converted.
    """
    precision: int = 5
    coordinate_format: CoordinateFormat = CoordinateFormat.MGRS
    placeholder: str = "Grid"

    def __post_init__(self) -> None:
        check_precision(self.precision)
        object.__setattr__(self, "coordinate_format", CoordinateFormat(self.coordinate_format))
