"""
Sites API Routes.

Supports:
- Map data for a region (sites, facets, centre, company colours)
- Listing the available regions
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from pipeline.config import DEFAULT_REGION, REGIONS, Settings, get_settings
from pipeline.errors import SiteDataError
from pipeline.map_data import build_map_data

logger = logging.getLogger(__name__)
router = APIRouter()


def load_map_data(region: str, settings: Settings) -> dict:
    """Build map data, translating pipeline failures into HTTP errors."""
    try:
        return build_map_data(region, settings)
    except SiteDataError as e:
        logger.warning(f"Site data error for region={e.region or region}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception(f"Unexpected error loading site data for region={region}")
        raise HTTPException(status_code=500, detail="Failed to load site data")


@router.get("")
def get_sites(
    region: str = Query(DEFAULT_REGION, description="Region key, e.g. uk, iceland, norway, canada, quebec"),
    settings: Settings = Depends(get_settings),
):
    """
    Get normalised sites for a region.

    Unknown regions fall back to the UK dataset.
    """
    return load_map_data(region, settings)


@router.get("/regions")
def list_regions():
    """List the region keys accepted by the sites endpoint."""
    return {
        "default": DEFAULT_REGION,
        "regions": [
            {"id": key, "name": info["name"], "description": info["description"]}
            for key, info in REGIONS.items()
        ],
    }
