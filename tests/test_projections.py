"""Batch conversion of point tables and CSV round trips."""

import sys
import os

import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tacgrid.core.distance import distance_m
from tacgrid.core.mgrs import to_mgrs
from tacgrid.core.projections import (
    GeographicProjection,
    MGRSProjection,
    ProjectionFactory,
    UTMProjection,
)
from tacgrid.core.utm import to_utm
from tacgrid.errors import InvalidPrecision, UnsupportedZone
from tacgrid.io import read_csv_to_dataframe, save_results_csv
from tacgrid.models import GridConfig


@pytest.fixture
def points_df():
    return pd.DataFrame({
        "Point": ["OP1", "OP2", "OP3"],
        "Lat": [39.0, -33.8688, 60.0],
        "Lon": [-77.0, 151.2093, 5.0],
    })


@pytest.fixture
def polar_df():
    return pd.DataFrame({
        "Point": ["OK", "POLE"],
        "Lat": [39.0, 88.0],
        "Lon": [-77.0, 0.0],
    })


class TestUTMProjection:

    def test_adds_columns(self, points_df):
        out = UTMProjection().project(points_df)
        assert list(out["Zone"]) == [18, 56, 32]
        assert list(out["Hemisphere"]) == ["N", "S", "N"]
        expected = to_utm((39.0, -77.0))
        np.testing.assert_allclose(out.loc[0, "Easting"], expected.easting)
        np.testing.assert_allclose(out.loc[0, "Northing"], expected.northing)

    def test_input_is_not_modified(self, points_df):
        UTMProjection().project(points_df)
        assert list(points_df.columns) == ["Point", "Lat", "Lon"]

    def test_strict_failure_names_point(self, polar_df):
        with pytest.raises(UnsupportedZone, match="POLE"):
            UTMProjection().project(polar_df)

    def test_lenient_leaves_gaps(self, polar_df):
        out = UTMProjection(strict=False).project(polar_df)
        assert out.loc[0, "Zone"] == 18
        assert pd.isna(out.loc[1, "Zone"])
        assert np.isnan(out.loc[1, "Easting"])


class TestMGRSProjection:

    def test_adds_mgrs_column(self, points_df):
        out = MGRSProjection(GridConfig(precision=3)).project(points_df)
        assert out.loc[0, "MGRS"] == to_mgrs((39.0, -77.0), 3)
        assert out.loc[2, "MGRS"].startswith("32V ")

    def test_lenient_uses_placeholder(self, polar_df):
        out = MGRSProjection(GridConfig(placeholder="--"), strict=False).project(polar_df)
        assert out.loc[1, "MGRS"] == "--"

    def test_bad_precision_fails_before_any_row(self):
        with pytest.raises(InvalidPrecision):
            MGRSProjection(GridConfig(precision=2.5), strict=False)

    def test_row_validation(self):
        df = pd.DataFrame({"Point": ["X"], "Lat": [95.0], "Lon": [0.0]})
        with pytest.raises(ValidationError):
            MGRSProjection().project(df)

    def test_long_column_names_and_numeric_ids(self):
        df = pd.DataFrame({"Point": [7], "Latitude": [39.0], "Longitude": [-77.0]})
        out = MGRSProjection().project(df)
        assert out.loc[0, "MGRS"] == to_mgrs((39.0, -77.0))


class TestGeographicProjection:

    def test_round_trip(self, points_df):
        grids = MGRSProjection().project(points_df)[["Point", "MGRS"]]
        out = GeographicProjection().project(grids)
        for i, row in points_df.iterrows():
            back = (out.loc[i, "Lat"], out.loc[i, "Lon"])
            assert distance_m((row["Lat"], row["Lon"]), back) < 1.0

    def test_lenient_bad_reference(self):
        df = pd.DataFrame({"Point": ["A", "B"], "MGRS": ["18SUJ2348006470", "99ABC12345"]})
        out = GeographicProjection(strict=False).project(df)
        assert out.loc[0, "Lat"] == pytest.approx(38.89, abs=0.05)
        assert np.isnan(out.loc[1, "Lat"])


class TestFactory:

    @pytest.mark.parametrize("method, cls", [
        ("utm", UTMProjection),
        ("mgrs", MGRSProjection),
        ("geographic", GeographicProjection),
    ])
    def test_create(self, method, cls):
        assert isinstance(ProjectionFactory.create(method), cls)

    def test_config_is_passed(self):
        projection = ProjectionFactory.create("mgrs", GridConfig(precision=2), strict=False)
        assert projection.config.precision == 2
        assert projection.strict is False

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown projection method"):
            ProjectionFactory.create("ups")


class TestCsv:

    def test_read_normalises_headers(self, tmp_path):
        path = tmp_path / "points.csv"
        path.write_text("ID,LATITUDE,lng\nA,39.0,-77.0\n", encoding="utf-8")
        df = read_csv_to_dataframe(path)
        assert list(df.columns) == ["Point", "Lat", "Lon"]

    def test_missing_point_column_is_numbered(self, tmp_path):
        path = tmp_path / "grids.csv"
        path.write_text("grid\n18SUJ2348006470\n31NEA0000000000\n", encoding="utf-8")
        df = read_csv_to_dataframe(path)
        assert list(df["Point"]) == ["1", "2"]
        assert list(df["MGRS"]) == ["18SUJ2348006470", "31NEA0000000000"]

    def test_save_and_reload(self, tmp_path, points_df):
        path = tmp_path / "out.csv"
        save_results_csv(path, MGRSProjection().project(points_df))
        df = pd.read_csv(path)
        assert list(df.columns) == ["Point", "Lat", "Lon", "MGRS"]
        assert len(df) == 3
