"""Display formats, the placeholder fallback and configuration values."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tacgrid.core.formatting import (
    format_coordinate,
    format_decimal_degrees,
    format_dms,
    format_utm,
    format_with_config,
    safe_format,
)
from tacgrid.core.mgrs import to_mgrs
from tacgrid.errors import InvalidPrecision, UnsupportedZone
from tacgrid.models import CoordinateFormat, GeographicCoordinate, GridConfig


WASHINGTON = GeographicCoordinate(39.0, -77.0)


class TestFormats:

    def test_mgrs_is_default(self):
        assert format_coordinate(WASHINGTON) == to_mgrs(WASHINGTON, 5)

    def test_mgrs_precision(self):
        assert format_coordinate(WASHINGTON, CoordinateFormat.MGRS, precision=2) == to_mgrs(WASHINGTON, 2)

    def test_utm(self):
        assert format_utm((0.0, 3.0)) == "31N 500000 0"
        assert format_coordinate((0.0, 3.0), "utm") == "31N 500000 0"

    def test_utm_uses_band_letter(self):
        zone_band, easting, northing = format_utm(WASHINGTON).split(" ")
        assert zone_band == "18S"
        assert easting.isdigit() and northing.isdigit()

    def test_decimal_degrees(self):
        assert format_decimal_degrees(WASHINGTON) == "39.000000° N, 77.000000° W"
        assert format_coordinate((-33.8688, 151.2093), "dd") == "33.868800° S, 151.209300° E"

    def test_dms(self):
        assert format_dms(WASHINGTON) == "39°00'00.00\"N 77°00'00.00\"W"
        assert format_coordinate((39.4567, -77.1234), CoordinateFormat.DMS) == "39°27'24.12\"N 77°07'24.24\"W"

    def test_dms_carries_rounded_seconds(self):
        assert format_dms((10.9999999, 0.0)) == "11°00'00.00\"N 0°00'00.00\"E"

    def test_polar_mgrs_raises(self):
        with pytest.raises(UnsupportedZone):
            format_coordinate((85.0, 0.0), CoordinateFormat.MGRS)

    def test_polar_decimal_degrees_is_fine(self):
        assert format_coordinate((85.0, 0.0), "dd") == "85.000000° N, 0.000000° E"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            format_coordinate(WASHINGTON, "maidenhead")


class TestPlaceholder:

    def test_no_coordinate(self):
        assert safe_format(None) == "Grid"

    def test_unsupported_latitude(self):
        assert safe_format((85.0, 0.0)) == "Grid"

    def test_invalid_latitude(self):
        assert safe_format((95.0, 0.0), "dd", placeholder="") == ""

    def test_invalid_precision(self):
        assert safe_format(WASHINGTON, precision=9) == "Grid"

    def test_valid_coordinate_passes_through(self):
        assert safe_format(WASHINGTON, "dd") == "39.000000° N, 77.000000° W"


class TestCoordinateFormat:

    @pytest.mark.parametrize("fmt, name", [
        (CoordinateFormat.MGRS, "MGRS"),
        (CoordinateFormat.UTM, "UTM"),
        (CoordinateFormat.DECIMAL_DEGREES, "DD"),
        (CoordinateFormat.DMS, "DMS"),
    ])
    def test_display_name(self, fmt, name):
        assert fmt.display_name == name

    def test_examples(self):
        assert CoordinateFormat.MGRS.example == "18T WL 12345 67890"
        assert CoordinateFormat("dms") is CoordinateFormat.DMS


class TestGridConfig:

    def test_defaults(self):
        config = GridConfig()
        assert config.precision == 5
        assert config.coordinate_format is CoordinateFormat.MGRS
        assert config.placeholder == "Grid"

    def test_format_from_string(self):
        assert GridConfig(coordinate_format="utm").coordinate_format is CoordinateFormat.UTM

    @pytest.mark.parametrize("precision", [0, 6, 2.5, True, "5"])
    def test_invalid_precision(self, precision):
        with pytest.raises(InvalidPrecision):
            GridConfig(precision=precision)


class TestFormatWithConfig:

    def test_default_config_is_mgrs(self):
        assert format_with_config(WASHINGTON) == to_mgrs(WASHINGTON)

    def test_uses_configured_format_and_precision(self):
        assert format_with_config(WASHINGTON, GridConfig(coordinate_format="dd")) == "39.000000° N, 77.000000° W"
        assert format_with_config(WASHINGTON, GridConfig(precision=2)) == to_mgrs(WASHINGTON, 2)

    def test_uses_configured_placeholder(self):
        assert format_with_config((85.0, 0.0), GridConfig(placeholder="--")) == "--"
        assert format_with_config(None, GridConfig(placeholder="n/a")) == "n/a"
