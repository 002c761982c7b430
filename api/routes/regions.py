"""
Dedicated per-region endpoints kept for older map clients.

Same response shape as ``/api/sites?region=...``.
"""

from fastapi import APIRouter, Depends

from api.routes.sites import load_map_data
from pipeline.config import Settings, get_settings

router = APIRouter()


@router.get("/iceland-sites")
def get_iceland_sites(settings: Settings = Depends(get_settings)):
    """Icelandic aquaculture sites."""
    return load_map_data("iceland", settings)


@router.get("/norwegian-sites")
def get_norwegian_sites(settings: Settings = Depends(get_settings)):
    """Norwegian aquaculture sites."""
    return load_map_data("norway", settings)


@router.get("/chile-sites")
def get_chile_sites(settings: Settings = Depends(get_settings)):
    """Chilean aquaculture concessions."""
    return load_map_data("chile", settings)
