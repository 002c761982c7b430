"""
Region registry.

Maps region keys from the query string onto ingester classes.
"""

import re

from loguru import logger

from pipeline.config import DEFAULT_REGION
from pipeline.ingesters.base import BaseSiteIngester
from pipeline.ingesters.canada import PROVINCE_INGESTERS, CanadaIngester
from pipeline.ingesters.chile import ChileIngester
from pipeline.ingesters.iceland import IcelandIngester
from pipeline.ingesters.norway import NorwayIngester
from pipeline.ingesters.uk import UKIngester

INGESTERS: dict[str, type[BaseSiteIngester] | type[CanadaIngester]] = {
    "uk": UKIngester,
    "iceland": IcelandIngester,
    "norway": NorwayIngester,
    "canada": CanadaIngester,
    **PROVINCE_INGESTERS,
    "chile": ChileIngester,
}


def resolve_region(key: str | None) -> str:
    """
    Normalise a requested region key.

    Keys are lower-cased and stripped of anything but letters, so
    "British Columbia" and "british-columbia" both resolve. Unknown or empty
    keys fall back to the default region.
    """
    cleaned = re.sub(r"[^a-z]", "", (key or "").lower())
    if cleaned in INGESTERS:
        return cleaned

    logger.warning(f"Unknown region {key!r}, falling back to {DEFAULT_REGION!r}")
    return DEFAULT_REGION


def get_ingester(region: str) -> type[BaseSiteIngester] | type[CanadaIngester]:
    """
    Ingester class for a resolved region key.

    Single-file regions load from one path; ``canada`` loads from a
    province -> path mapping.
    """
    return INGESTERS[region]
