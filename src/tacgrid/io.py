from __future__ import annotations

from pathlib import Path

import pandas as pd

# lower-cased header -> canonical column name
_COLUMN_ALIASES = {
    "point": "Point",
    "id": "Point",
    "name": "Point",
    "lat": "Lat",
    "latitude": "Lat",
    "lon": "Lon",
    "lng": "Lon",
    "long": "Lon",
    "longitude": "Lon",
    "mgrs": "MGRS",
    "grid": "MGRS",
}


def read_csv_to_dataframe(path: str | Path) -> pd.DataFrame:
    """
    Reads a point CSV and renames recognised headers (case-insensitive) to
    Point / Lat / Lon / MGRS. Unknown columns are kept as they are. A missing
    Point column is filled with the 1-based row number.
    """
    df = pd.read_csv(path)
    renames = {}
    for col in df.columns:
        canonical = _COLUMN_ALIASES.get(str(col).strip().lower())
        if canonical and canonical not in renames.values():
            renames[col] = canonical
    df = df.rename(columns=renames)

    if "Point" not in df.columns:
        df.insert(0, "Point", [str(i) for i in range(1, len(df) + 1)])
    return df


def save_results_csv(path: str | Path, df: pd.DataFrame) -> None:
    """Saves a Pandas DataFrame to CSV."""
    df.to_csv(path, index=False)
