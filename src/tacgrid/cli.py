import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from tacgrid.core.distance import bearing_deg, distance_m, format_bearing, format_distance
from tacgrid.core.formatting import (
    format_coordinate,
    format_decimal_degrees,
    format_dms,
    format_utm,
    format_with_config,
)
from tacgrid.core.mgrs import from_mgrs, to_mgrs
from tacgrid.core.projections import ProjectionFactory
from tacgrid.core.reference import projection_deviation, reference_utm
from tacgrid.core.utm import from_utm, to_utm
from tacgrid.domain.schemas import ConversionResult
from tacgrid.errors import GridConversionError
from tacgrid.io import read_csv_to_dataframe, save_results_csv
from tacgrid.models import CoordinateFormat, GeographicCoordinate, GridConfig, UTMCoordinate

app = typer.Typer(no_args_is_help=True)

LAT_OPTION = typer.Option(..., "--lat", help="Latitude in decimal degrees (south negative)")
LON_OPTION = typer.Option(..., "--lon", help="Longitude in decimal degrees (west negative)")


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    """tacgrid: WGS84 / UTM / MGRS coordinate conversion."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def version() -> None:
    """Print version."""
    typer.echo("tacgrid 0.1.0")


@app.command("to-mgrs")
def to_mgrs_cmd(
    lat: float = LAT_OPTION,
    lon: float = LON_OPTION,
    precision: int = typer.Option(5, "--precision", "-p", help="Digits per axis, 1 (10 km) to 5 (1 m)."),
) -> None:
    """Convert a latitude/longitude to an MGRS grid reference."""
    try:
        typer.echo(to_mgrs(GeographicCoordinate(lat, lon), precision))
    except GridConversionError as e:
        _fail(e)


@app.command("from-mgrs")
def from_mgrs_cmd(
    grid: List[str] = typer.Argument(..., help="MGRS reference; spaces between groups are allowed."),
) -> None:
    """Convert an MGRS grid reference to latitude/longitude (cell centre)."""
    try:
        coord = from_mgrs(" ".join(grid))
    except GridConversionError as e:
        _fail(e)
    typer.echo(f"{coord.latitude:.6f} {coord.longitude:.6f}")


@app.command("to-utm")
def to_utm_cmd(lat: float = LAT_OPTION, lon: float = LON_OPTION) -> None:
    """Convert a latitude/longitude to UTM zone, hemisphere, easting and northing."""
    try:
        utm = to_utm(GeographicCoordinate(lat, lon))
    except GridConversionError as e:
        _fail(e)
    typer.echo(f"{utm.zone} {utm.hemisphere.value} {utm.easting:.3f} {utm.northing:.3f}")


@app.command("from-utm")
def from_utm_cmd(
    zone: int = typer.Argument(..., help="UTM zone number (1-60)."),
    hemisphere: str = typer.Argument(..., help="N or S."),
    easting: float = typer.Argument(...),
    northing: float = typer.Argument(...),
) -> None:
    """Convert a UTM position to latitude/longitude."""
    try:
        coord = from_utm(UTMCoordinate(zone, hemisphere.upper(), easting, northing))
    except GridConversionError as e:
        _fail(e)
    except ValueError:
        _fail(ValueError(f"Hemisphere must be N or S, got {hemisphere!r}"))
    typer.echo(f"{coord.latitude:.6f} {coord.longitude:.6f}")


@app.command("format")
def format_cmd(
    lat: float = LAT_OPTION,
    lon: float = LON_OPTION,
    fmt: CoordinateFormat = typer.Option(CoordinateFormat.MGRS, "--as", help="Output format."),
    precision: int = typer.Option(5, "--precision", "-p", help="MGRS digits per axis."),
    placeholder: Optional[str] = typer.Option(
        None, "--placeholder", help="Print this instead of failing when the coordinate cannot be converted."
    ),
) -> None:
    """Print a coordinate in one display format."""
    try:
        config = GridConfig(precision=precision, coordinate_format=fmt)
        if placeholder is not None:
            typer.echo(format_with_config((lat, lon), replace(config, placeholder=placeholder)))
            return
        typer.echo(format_coordinate(GeographicCoordinate(lat, lon), config.coordinate_format, config.precision))
    except GridConversionError as e:
        _fail(e)


@app.command()
def inspect(
    lat: float = LAT_OPTION,
    lon: float = LON_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON document."),
) -> None:
    """Show a coordinate in every supported format."""
    try:
        coord = GeographicCoordinate(lat, lon)
        utm = to_utm(coord)
        result = ConversionResult(
            latitude=coord.latitude,
            longitude=coord.longitude,
            mgrs=to_mgrs(coord),
            utm=format_utm(coord),
            decimal_degrees=format_decimal_degrees(coord),
            dms=format_dms(coord),
            zone=utm.zone,
            hemisphere=utm.hemisphere.value,
            easting=utm.easting,
            northing=utm.northing,
            deviation_m=projection_deviation(coord),
        )
    except GridConversionError as e:
        _fail(e)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    for fmt in CoordinateFormat:
        value = {
            CoordinateFormat.MGRS: result.mgrs,
            CoordinateFormat.UTM: result.utm,
            CoordinateFormat.DECIMAL_DEGREES: result.decimal_degrees,
            CoordinateFormat.DMS: result.dms,
        }[fmt]
        typer.echo(f"{fmt.display_name:<5} {value}")
    typer.echo(f"{'PROJ':<5} {result.deviation_m * 1000:.3f} mm deviation")


@app.command()
def convert(
    input_csv: Path = typer.Option(..., "--input-csv", exists=True, readable=True, help="CSV with Point,Lat,Lon or Point,MGRS columns"),
    output_csv: Path = typer.Option(..., "--output-csv", help="Output CSV with the added columns."),
    method: str = typer.Option("mgrs", "--method", help="Conversion: [mgrs|utm|geographic]"),
    precision: int = typer.Option(5, "--precision", "-p", help="MGRS digits per axis."),
    placeholder: str = typer.Option("Grid", "--placeholder", help="Text written for points that cannot be converted."),
    lenient: bool = typer.Option(False, "--lenient", help="Keep going past points that cannot be converted."),
) -> None:
    """
    Converts every point of a CSV file. mgrs/utm read Lat/Lon columns,
    geographic reads an MGRS column.
    """
    try:
        config = GridConfig(precision=precision, placeholder=placeholder)
        projection = ProjectionFactory.create(method, config, strict=not lenient)
        df = read_csv_to_dataframe(input_csv)
        result = projection.project(df)
    except (GridConversionError, ValidationError) as e:
        _fail(e)
    except ValueError as e:
        # unknown --method
        _fail(e)

    save_results_csv(output_csv, result)
    typer.echo(f"{len(result)} points written to: {output_csv}")


@app.command()
def crosscheck(lat: float = LAT_OPTION, lon: float = LON_OPTION) -> None:
    """Compare the built-in UTM projection with PROJ for one coordinate."""
    try:
        coord = GeographicCoordinate(lat, lon)
        utm = to_utm(coord)
        easting, northing = reference_utm(coord, utm.zone)
        deviation = projection_deviation(coord)
    except GridConversionError as e:
        _fail(e)

    typer.echo(f"tacgrid: {utm.zone}{utm.hemisphere.value} {utm.easting:.4f} {utm.northing:.4f}")
    typer.echo(f"PROJ:    {utm.zone}{utm.hemisphere.value} {easting:.4f} {northing:.4f}")
    typer.echo(f"Deviation: {deviation * 1000:.3f} mm")


@app.command()
def distance(
    lat1: float = typer.Option(..., "--lat1", help="Start latitude in decimal degrees."),
    lon1: float = typer.Option(..., "--lon1", help="Start longitude in decimal degrees."),
    lat2: float = typer.Option(..., "--lat2", help="End latitude in decimal degrees."),
    lon2: float = typer.Option(..., "--lon2", help="End longitude in decimal degrees."),
) -> None:
    """Great-circle distance and initial bearing between two coordinates."""
    try:
        start = GeographicCoordinate(lat1, lon1)
        end = GeographicCoordinate(lat2, lon2)
    except GridConversionError as e:
        _fail(e)
    typer.echo(f"{format_distance(distance_m(start, end))} {format_bearing(bearing_deg(start, end))}")


if __name__ == "__main__":
    app()
