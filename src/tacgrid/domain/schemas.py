from typing import Optional

from pydantic import BaseModel, Field, field_validator


class _PointRow(BaseModel):
    Point: str

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("Point", mode="before")
    @classmethod
    def point_id_as_text(cls, v):
        # CSV readers hand numeric ids over as int/float
        return str(v)


class GeographicPoint(_PointRow):
    Lat: float = Field(ge=-90.0, le=90.0, alias="Latitude")
    Lon: float = Field(ge=-180.0, le=180.0, alias="Longitude")


class GridPoint(_PointRow):
    MGRS: str = Field(min_length=1)


class ConversionResult(BaseModel):
    latitude: float
    longitude: float
    mgrs: str
    utm: str
    decimal_degrees: str
    dms: str
    zone: int
    hemisphere: str
    easting: float
    northing: float
    deviation_m: Optional[float] = None
