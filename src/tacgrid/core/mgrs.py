"""
UTM <-> MGRS.

An MGRS reference is ``<zone><band> <column><row> <easting> <northing>``:
the UTM zone, an 8 degree latitude band letter, the two-letter 100 km grid
square and the low-order easting/northing digits inside that square. The
letter tables skip I and O.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from tacgrid.core.utm import CoordinateLike, as_coordinate, from_utm, to_utm
from tacgrid.errors import MalformedGridReference, OutOfRangeZoneNumber
from tacgrid.models import GeographicCoordinate, Hemisphere, UTMCoordinate, check_precision

logger = logging.getLogger(__name__)

BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"
COLUMN_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"
ROW_LETTERS = "ABCDEFGHJKLMNPQRSTUV"

GRID_SQUARE_SIZE = 100_000
ROW_CYCLE = 2_000_000.0

# Band edges are placed with a flat metres-per-degree figure rather than the
# ellipsoidal meridian arc; the row-cycle resolution below depends on it.
METERS_PER_DEGREE = 111_000.0

_FIRST_NORTHERN_BAND = BAND_LETTERS.index("N")

_MGRS_RE = re.compile(
    r"""^
    (?P<zone>[0-9]+)
    (?P<band>[A-Z])
    (?P<column>[A-Z])
    (?P<row>[A-Z])
    (?P<digits>.*)
    $""",
    re.VERBOSE,
)
_DIGITS_RE = re.compile(r"[0-9]+")


def latitude_band(latitude: float) -> str:
    """
    Band letter for a latitude. Bands are 8 degrees tall from 80S; the index
    is clamped, so 80N..84N falls in X.
    """
    idx = int(math.floor((latitude + 80.0) / 8.0))
    idx = min(max(idx, 0), len(BAND_LETTERS) - 1)
    return BAND_LETTERS[idx]


def band_hemisphere(band: str) -> Hemisphere:
    if BAND_LETTERS.index(band) < _FIRST_NORTHERN_BAND:
        return Hemisphere.SOUTH
    return Hemisphere.NORTH


def band_min_northing(band: str) -> float:
    """
    Lowest northing accepted for a band when resolving the 2 000 000 m row
    cycle: the band's southern edge at 111 km per degree, less one grid
    square. The allowance covers the gap between the flat figure and the
    meridian arc (up to ~12 km) and the cell truncation of low precisions.
    """
    edge_latitude = BAND_LETTERS.index(band) * 8.0 - 80.0
    false_northing = 10_000_000.0 if band_hemisphere(band) is Hemisphere.SOUTH else 0.0
    return false_northing + edge_latitude * METERS_PER_DEGREE - GRID_SQUARE_SIZE


def _column_offset(zone: int) -> int:
    # column sets A-H, J-R, S-Z repeat every three zones
    return 8 * ((zone - 1) % 3)


def _row_offset(zone: int) -> int:
    # odd zones start the row alphabet at A, even zones at F
    return 0 if zone % 2 == 1 else 5


def grid_square(zone: int, easting: float, northing: float) -> str:
    """Two-letter 100 km square identifier for a UTM position."""
    e100k = int(easting // GRID_SQUARE_SIZE)
    column = COLUMN_LETTERS[(_column_offset(zone) + e100k - 1) % len(COLUMN_LETTERS)]

    n100k = int(northing // GRID_SQUARE_SIZE) % len(ROW_LETTERS)
    row = ROW_LETTERS[(_row_offset(zone) + n100k) % len(ROW_LETTERS)]
    return column + row


@dataclass(frozen=True)
class MGRSReference:
    """
    Parsed MGRS grid reference.

    easting / northing hold the digit groups as typed, so "00450" and "0045"
    stay distinct references (1 m and 10 m precision).
    """
    zone: int
    band: str
    column: str
    row: str
    easting: str
    northing: str

    def __post_init__(self) -> None:
        if not 1 <= self.zone <= 60:
            raise OutOfRangeZoneNumber(f"Zone number must be in 1..60, got {self.zone}")
        if len(self.band) != 1 or self.band not in BAND_LETTERS:
            raise MalformedGridReference(f"Invalid latitude band letter: {self.band!r}")
        if len(self.column) != 1 or self.column not in COLUMN_LETTERS:
            raise MalformedGridReference(f"Invalid grid square column letter: {self.column!r}")
        if (COLUMN_LETTERS.index(self.column) - _column_offset(self.zone)) % len(COLUMN_LETTERS) >= 8:
            raise MalformedGridReference(
                f"Column letter {self.column!r} is not used in zone {self.zone}"
            )
        if len(self.row) != 1 or self.row not in ROW_LETTERS:
            raise MalformedGridReference(f"Invalid grid square row letter: {self.row!r}")

        for name, digits in (("easting", self.easting), ("northing", self.northing)):
            if not digits:
                raise MalformedGridReference(f"Missing {name} digits")
            if not _DIGITS_RE.fullmatch(digits):
                raise MalformedGridReference(f"Non-numeric {name} digits: {digits!r}")
        if len(self.easting) != len(self.northing):
            raise MalformedGridReference(
                f"Easting and northing digit counts differ: {self.easting!r} / {self.northing!r}"
            )
        if len(self.easting) > 5:
            raise MalformedGridReference(f"More than 5 digits per axis: {self.easting!r}")

    @classmethod
    def from_parts(cls, grid_zone: str, square: str, easting: str, northing: str) -> "MGRSReference":
        """Builds a reference from separately entered fields, e.g. "18S", "UJ", "234", "064"."""
        return parse_mgrs(f"{grid_zone}{square}{easting}{northing}")

    @property
    def precision(self) -> int:
        return len(self.easting)

    @property
    def grid_zone(self) -> str:
        return f"{self.zone}{self.band}"

    @property
    def square(self) -> str:
        return self.column + self.row

    @property
    def hemisphere(self) -> Hemisphere:
        return band_hemisphere(self.band)

    def compact(self) -> str:
        return f"{self.grid_zone}{self.square}{self.easting}{self.northing}"

    def __str__(self) -> str:
        return f"{self.grid_zone} {self.square} {self.easting} {self.northing}"

    def to_utm(self, center: bool = False) -> UTMCoordinate:
        """
        Full UTM position of the referenced cell's south-west corner, or of
        its centre when ``center`` is set.
        """
        scale = 10 ** (5 - self.precision)

        e100k = (COLUMN_LETTERS.index(self.column) - _column_offset(self.zone)) % len(COLUMN_LETTERS) + 1
        easting = float(e100k * GRID_SQUARE_SIZE + int(self.easting) * scale)

        n100k = (ROW_LETTERS.index(self.row) - _row_offset(self.zone)) % len(ROW_LETTERS)
        northing = float(n100k * GRID_SQUARE_SIZE + int(self.northing) * scale)

        min_northing = band_min_northing(self.band)
        while northing < min_northing:
            northing += ROW_CYCLE
        logger.debug("%s: row cycle resolved to northing %.0f (band floor %.0f)", self, northing, min_northing)

        if center:
            easting += scale / 2.0
            northing += scale / 2.0

        return UTMCoordinate(zone=self.zone, hemisphere=self.hemisphere, easting=easting, northing=northing)


def parse_mgrs(text: str) -> MGRSReference:
    """
    Splits an MGRS string into its components. Whitespace anywhere is
    ignored and letters are case-insensitive.
    """
    if not isinstance(text, str):
        raise MalformedGridReference(f"Grid reference must be a string, got {type(text).__name__}")

    clean = "".join(text.split()).upper()
    if len(clean) < 5:
        raise MalformedGridReference(f"Grid reference too short: {text!r}")

    m = _MGRS_RE.match(clean)
    if not m:
        raise MalformedGridReference(f"Bad grid reference format: {text!r}")

    zone = int(m.group("zone"))
    if not 1 <= zone <= 60:
        raise OutOfRangeZoneNumber(f"Zone number must be in 1..60, got {zone} in {text!r}")

    digits = m.group("digits")
    if not digits:
        raise MalformedGridReference(f"No easting/northing digits in {text!r}")
    if not _DIGITS_RE.fullmatch(digits):
        raise MalformedGridReference(f"Non-numeric easting/northing in {text!r}")
    if len(digits) % 2 != 0:
        raise MalformedGridReference(
            f"Easting/northing must have the same number of digits, got {len(digits)} digits in {text!r}"
        )

    half = len(digits) // 2
    return MGRSReference(
        zone=zone,
        band=m.group("band"),
        column=m.group("column"),
        row=m.group("row"),
        easting=digits[:half],
        northing=digits[half:],
    )


def mgrs_reference(coordinate: CoordinateLike, precision: int = 5) -> MGRSReference:
    check_precision(precision)
    coord = as_coordinate(coordinate)
    utm = to_utm(coord)

    column, row = grid_square(utm.zone, utm.easting, utm.northing)
    factor = 10 ** (5 - precision)
    e = int(math.floor(utm.easting)) % GRID_SQUARE_SIZE
    n = int(math.floor(utm.northing)) % GRID_SQUARE_SIZE

    return MGRSReference(
        zone=utm.zone,
        band=latitude_band(coord.latitude),
        column=column,
        row=row,
        easting=f"{e // factor:0{precision}d}",
        northing=f"{n // factor:0{precision}d}",
    )


def to_mgrs(coordinate: CoordinateLike, precision: int = 5) -> str:
    """Formats a coordinate as ``"18S UJ 23480 06470"`` with ``precision`` digits per axis."""
    return str(mgrs_reference(coordinate, precision))


def from_mgrs(text: str) -> GeographicCoordinate:
    """Centre of the cell named by an MGRS string (spaces optional, any case)."""
    return from_utm(parse_mgrs(text).to_utm(center=True))


def grid_zone_designator(coordinate: CoordinateLike) -> str:
    """Zone number and band letter, e.g. "18S"."""
    coord = as_coordinate(coordinate)
    return f"{to_utm(coord).zone}{latitude_band(coord.latitude)}"
