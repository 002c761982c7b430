"""
Coordinate normalisation to WGS84 decimal degrees.

Every converter returns a ``(lat, lon)`` tuple, or ``(None, None)`` when the
source coordinate is missing, zero, non-finite, unparseable or outside the
WGS84 range. Converters never raise on bad input.
"""

import math
import re
from typing import Optional

from loguru import logger
from pyproj import Transformer
from pyproj.exceptions import ProjError

from pipeline.utils.geo import is_valid_coordinates
from pipeline.utils.text import clean_value

# British National Grid (EPSG:27700) as an explicit PROJ definition. The
# parameters must match exactly; the OSGB36 datum carries the Helmert shift.
BNG_PROJ = (
    "+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 "
    "+x_0=400000 +y_0=-100000 +ellps=airy +datum=OSGB36 +units=m +no_defs"
)
WGS84 = "EPSG:4326"

# Spherical radius used by Web Mercator (EPSG:3857)
EARTH_RADIUS_M = 6378137.0

LatLon = tuple[Optional[float], Optional[float]]

_ABSENT: LatLon = (None, None)


def _coerce_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = clean_value(value)
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None

    if not math.isfinite(number) or number == 0:
        return None
    return number


def coerce_coordinate(value) -> Optional[float]:
    """Coerce a raw decimal-degree cell to float.

    Accepts numbers and numeric strings, including a single decimal comma
    ("59,91"). Returns None for blank, non-numeric, non-finite and zero values.
    """
    if isinstance(value, str):
        text = clean_value(value)
        if "," in text and "." not in text and text.count(",") == 1:
            value = text.replace(",", ".")
    return _coerce_number(value)


_THOUSANDS = re.compile(r"^[+-]?\d{1,3}(?:,\d{3})+(?:\.\d+)?$")


def coerce_metres(value) -> Optional[float]:
    """Coerce a projected (metre) coordinate cell to float.

    Commas are only read as thousands separators ("258,000"); a value with
    any other comma is unusable and gives None, as do blank, non-numeric,
    non-finite and zero values.
    """
    if isinstance(value, str):
        text = clean_value(value)
        if "," in text:
            if not _THOUSANDS.match(text):
                return None
            value = text.replace(",", "")
    return _coerce_number(value)


def _finalize(lat: Optional[float], lon: Optional[float]) -> LatLon:
    if lat is None or lon is None:
        return _ABSENT
    if lat == 0 or lon == 0:
        return _ABSENT
    if not is_valid_coordinates(lat, lon):
        return _ABSENT
    return lat, lon


def coerce_latlon(lat, lon) -> LatLon:
    """Pass-through conversion for sources already in decimal degrees."""
    return _finalize(coerce_coordinate(lat), coerce_coordinate(lon))


def make_bng_transformer() -> Transformer:
    """Build a BNG -> WGS84 transformer.

    pyproj transformers are not thread-safe; build one per pipeline run.
    """
    return Transformer.from_crs(BNG_PROJ, WGS84, always_xy=True)


def osgrid_to_latlon(easting, northing, transformer: Transformer | None = None) -> LatLon:
    """Convert a British National Grid easting/northing pair to WGS84.

    Args:
        easting: Easting in metres (number or numeric string)
        northing: Northing in metres (number or numeric string)
        transformer: Optional transformer from ``make_bng_transformer``

    Returns:
        Tuple of (lat, lon), or (None, None) if conversion fails
    """
    x = coerce_metres(easting)
    y = coerce_metres(northing)
    if x is None or y is None:
        return _ABSENT

    transformer = transformer or make_bng_transformer()
    try:
        lon, lat = transformer.transform(x, y)
    except ProjError as e:
        logger.debug(f"BNG conversion failed for ({x}, {y}): {e}")
        return _ABSENT

    return _finalize(lat, lon)


def web_mercator_to_latlon(x, y) -> LatLon:
    """Invert spherical Web Mercator (EPSG:3857) metres to WGS84 degrees."""
    mx = coerce_metres(x)
    my = coerce_metres(y)
    if mx is None or my is None:
        return _ABSENT

    try:
        lon = math.degrees(mx / EARTH_RADIUS_M)
        lat = math.degrees(2 * math.atan(math.exp(my / EARTH_RADIUS_M)) - math.pi / 2)
    except OverflowError:
        logger.debug(f"Web Mercator conversion overflowed for ({mx}, {my})")
        return _ABSENT

    return _finalize(lat, lon)


# Degree, minute and second markers seen in the wild, including typographic
# primes, curly quotes and the acute accent used by Spanish registers.
_DMS_BODY = re.compile(r"^[\d\s.°º˚'’′´\"”″:]+$")
_DMS_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_HEMISPHERE_TRAILING = re.compile(r"([NSEW])\s*$")
_HEMISPHERE_LEADING = re.compile(r"^\s*([NSEW])")


def parse_dms(value, default_hemisphere: str | None = None) -> Optional[float]:
    """Parse a degrees-minutes-seconds string into signed decimal degrees.

    Accepts forms such as ``45° 30' 15" N``, ``N 45 30 15``, ``45:30:15W``,
    ``-63°12.5'`` and plain decimal degrees. The hemisphere letter may lead or
    trail. S and W (or a leading minus) give a negative result;
    ``default_hemisphere`` is used only when neither is present.

    Returns:
        Decimal degrees, or None if the string is not a DMS coordinate
    """
    text = clean_value(value).upper()
    if not text:
        return None

    hemisphere = None
    match = _HEMISPHERE_TRAILING.search(text) or _HEMISPHERE_LEADING.search(text)
    if match:
        hemisphere = match.group(1)
        text = (text[:match.start()] + text[match.end():]).strip()

    negative = text.startswith("-")
    text = text.lstrip("+-").strip()
    if not text or not _DMS_BODY.match(text):
        return None

    parts = _DMS_NUMBER.findall(text)
    if not 1 <= len(parts) <= 3:
        return None

    degrees = float(parts[0])
    minutes = float(parts[1]) if len(parts) > 1 else 0.0
    seconds = float(parts[2]) if len(parts) > 2 else 0.0
    if minutes >= 60 or seconds >= 60 or degrees > 180:
        return None

    decimal = degrees + minutes / 60 + seconds / 3600

    if hemisphere is None and not negative:
        hemisphere = default_hemisphere
    if negative or hemisphere in ("S", "W"):
        decimal = -decimal
    return decimal


def dms_to_latlon(
    lat_value,
    lon_value,
    default_lon_hemisphere: str | None = None,
    default_lat_hemisphere: str | None = None,
) -> LatLon:
    """Convert a pair of DMS strings to WGS84 decimal degrees."""
    lat = parse_dms(lat_value, default_hemisphere=default_lat_hemisphere)
    lon = parse_dms(lon_value, default_hemisphere=default_lon_hemisphere)
    return _finalize(lat, lon)


def dms_pair_to_latlon(
    value,
    default_lat_hemisphere: str | None = None,
    default_lon_hemisphere: str | None = None,
) -> LatLon:
    """Parse a single "lat, lon" DMS cell such as ``S 41°35´14.48, W 73°37´45.16``.

    Polygon concessions list one vertex per line; the first line that gives
    a valid pair is used.
    """
    for line in clean_value(value).splitlines():
        parts = line.split(",")
        if len(parts) != 2:
            continue
        lat, lon = dms_to_latlon(
            parts[0],
            parts[1],
            default_lon_hemisphere=default_lon_hemisphere,
            default_lat_hemisphere=default_lat_hemisphere,
        )
        if lat is not None:
            return lat, lon
    return _ABSENT
