import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
import pandas as pd

from tacgrid.core.mgrs import from_mgrs, to_mgrs
from tacgrid.core.utm import to_utm
from tacgrid.domain.schemas import GeographicPoint, GridPoint
from tacgrid.errors import GridConversionError
from tacgrid.models import GridConfig

logger = logging.getLogger(__name__)


class Projection(ABC):
    """
    Batch conversion over a DataFrame of points.

    strict:
      True  - the first point that cannot be converted raises, naming the point.
      False - such points are logged and get NaN / the configured placeholder.
    """

    def __init__(self, config: Optional[GridConfig] = None, strict: bool = True):
        self.config = config or GridConfig()
        self.strict = strict

    @abstractmethod
    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        pass

    def _failed(self, point: str, error: GridConversionError) -> None:
        if self.strict:
            raise type(error)(f"Point {point}: {error}") from error
        logger.warning("Point %s skipped: %s", point, error)


class UTMProjection(Projection):
    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Projects geodetic coordinates (Lat, Lon) to UTM.
        Adds Zone, Hemisphere, Easting and Northing columns.
        """
        points = [GeographicPoint(**row) for row in df.to_dict("records")]

        zones, hemispheres, eastings, northings = [], [], [], []
        for p in points:
            try:
                utm = to_utm((p.Lat, p.Lon))
            except GridConversionError as e:
                self._failed(p.Point, e)
                zones.append(pd.NA)
                hemispheres.append(None)
                eastings.append(np.nan)
                northings.append(np.nan)
                continue
            zones.append(utm.zone)
            hemispheres.append(utm.hemisphere.value)
            eastings.append(utm.easting)
            northings.append(utm.northing)

        out = df.copy()
        out["Zone"] = pd.array(zones, dtype="Int64")
        out["Hemisphere"] = hemispheres
        out["Easting"] = eastings
        out["Northing"] = northings
        return out


class MGRSProjection(Projection):
    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        """Adds an MGRS column at the configured precision."""
        points = [GeographicPoint(**row) for row in df.to_dict("records")]

        grids = []
        for p in points:
            try:
                grids.append(to_mgrs((p.Lat, p.Lon), self.config.precision))
            except GridConversionError as e:
                self._failed(p.Point, e)
                grids.append(self.config.placeholder)

        out = df.copy()
        out["MGRS"] = grids
        return out


class GeographicProjection(Projection):
    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        """Decodes the MGRS column to Lat / Lon (centre of each grid cell)."""
        points = [GridPoint(**row) for row in df.to_dict("records")]

        lats, lons = [], []
        for p in points:
            try:
                coord = from_mgrs(p.MGRS)
            except GridConversionError as e:
                self._failed(p.Point, e)
                lats.append(np.nan)
                lons.append(np.nan)
                continue
            lats.append(coord.latitude)
            lons.append(coord.longitude)

        out = df.copy()
        out["Lat"] = lats
        out["Lon"] = lons
        return out


class ProjectionFactory:
    @staticmethod
    def create(method: str, config: Optional[GridConfig] = None, strict: bool = True) -> Projection:
        if method == "utm":
            return UTMProjection(config, strict)
        elif method == "mgrs":
            return MGRSProjection(config, strict)
        elif method == "geographic":
            return GeographicProjection(config, strict)
        else:
            raise ValueError(f"Unknown projection method: {method}")
