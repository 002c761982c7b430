"""
Map data service.

Builds the JSON payload the map front end consumes for one region: the
normalised sites, filter facets, counts, centre and company colours.
Nothing is cached; every call re-reads the configured export.
"""

from typing import Any, Optional

from loguru import logger

from pipeline.config import CANADIAN_PROVINCES, Settings, get_settings
from pipeline.errors import SiteDataError
from pipeline.ingesters.base import IngestResult
from pipeline.ingesters.canada import CanadaIngester
from pipeline.ingesters.csv_source import fetch_csv_rows
from pipeline.ingesters.registry import get_ingester, resolve_region


def ingest_region(region: str, settings: Optional[Settings] = None) -> IngestResult:
    """
    Load and normalise one (already resolved) region.

    Raises:
        SiteDataError: With ``region`` set, when the source is missing,
            unreachable or malformed
    """
    settings = settings or get_settings()
    sites_config = settings.sites

    try:
        if region == "canada":
            paths = {province: sites_config.locate(province) for province in CANADIAN_PROVINCES}
            return CanadaIngester().load(paths)

        ingester = get_ingester(region)()
        if region == "norway" and sites_config.norway_remote_url:
            return ingester.load_rows(fetch_csv_rows(sites_config.norway_remote_url))
        return ingester.load(sites_config.locate(region))
    except SiteDataError as e:
        e.region = region
        logger.error(f"Failed to load {region} site data: {e.message}")
        raise


def build_map_data(region: Optional[str] = None, settings: Optional[Settings] = None) -> dict[str, Any]:
    """
    Build the map response for a requested region key.

    Unknown or missing keys fall back to the default region.

    Returns:
        Dict with ``region``, ``sites``, ``filters``, ``totalCount``,
        ``validCount``, ``center`` and ``companyColors``
    """
    resolved = resolve_region(region)
    return ingest_region(resolved, settings).to_response()
