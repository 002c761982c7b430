"""Geographic utility functions for the site data pipeline."""

import math


def is_valid_coordinates(lat: float, lon: float) -> bool:
    """Check if latitude and longitude are finite, in-range WGS84 values.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are valid, False otherwise
    """
    if lat is None or lon is None:
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def has_coordinates(site) -> bool:
    """True when a site record carries a usable position."""
    return is_valid_coordinates(site.latitude, site.longitude)


def get_center(sites) -> tuple[float | None, float | None]:
    """Mean position of all sites that have coordinates.

    Args:
        sites: Iterable of site records with ``latitude``/``longitude``

    Returns:
        Tuple of (latitude, longitude) or (None, None) if no site is placed
    """
    lats = []
    lons = []
    for site in sites:
        if has_coordinates(site):
            lats.append(site.latitude)
            lons.append(site.longitude)

    if not lats:
        return None, None

    return sum(lats) / len(lats), sum(lons) / len(lons)
