from __future__ import annotations

import re
from typing import Tuple


_DMS_RE = re.compile(
    r"""^\s*
    (?P<pre>[NSEW])?\s*
    (?P<deg>\d{1,3})\s*°\s*
    (?P<min>\d{1,2})\s*'\s*
    (?P<sec>\d+(?:\.\d+)?)\s*"\s*
    (?P<post>[NSEW])?\s*
    $""",
    re.VERBOSE | re.IGNORECASE,
)


def dms_to_decimal(dms: str) -> float:
    """
    Convert strings like:
      S24°17'00.52919"  -> -24.28348033...
      39°00'00.00"N     ->  39.0
      77°07'24.00"W     -> -77.12333...
    The hemisphere letter may lead or trail, but not both.
    """
    m = _DMS_RE.match(dms)
    if not m or bool(m.group("pre")) == bool(m.group("post")):
        raise ValueError(f"Bad DMS format: {dms!r}")

    hem = (m.group("pre") or m.group("post")).upper()
    deg = float(m.group("deg"))
    minute = float(m.group("min"))
    sec = float(m.group("sec"))
    if minute >= 60 or sec >= 60:
        raise ValueError(f"Bad DMS format: {dms!r}")

    dec = deg + minute / 60.0 + sec / 3600.0
    if hem in ("S", "W"):
        dec = -dec
    return dec


def decimal_to_dms(value: float, decimals: int = 2) -> Tuple[int, int, float]:
    """
    Split |value| into degrees, minutes and seconds, with seconds rounded to
    ``decimals`` places and carried so they never display as 60.
    """
    total = round(abs(value) * 3600.0, decimals)
    deg = int(total // 3600)
    minute = int((total - deg * 3600) // 60)
    sec = round(total - deg * 3600 - minute * 60, decimals)
    return deg, minute, sec
