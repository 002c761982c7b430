"""
Norwegian aquaculture site ingester.

Reads the Directorate of Fisheries site register export. Coordinates are
decimal degrees; species names are translated from Norwegian.
"""

from dataclasses import dataclass
from typing import Optional

from pipeline.ingesters.base import BaseSiteIngester, SiteRecord, pick
from pipeline.ingesters.csv_source import Row
from pipeline.normalizers.coordinates import coerce_latlon
from pipeline.normalizers.facets import extract_facet, extract_species_facet
from pipeline.normalizers.hover import build_hover_text
from pipeline.normalizers.species import (
    NORWEGIAN_SPECIES,
    normalize_species_list,
    translate_species_string,
)


@dataclass
class NorwegianSite(SiteRecord):
    site_id: str = ""
    site_name: str = ""
    site_status: str = ""
    approval_date: str = ""
    approval_type: str = ""
    site_capacity: float = 0.0
    temporary_capacity: float = 0.0
    capacity_unit_type: str = ""
    placement: str = ""
    water_type: str = ""
    site_details: str = ""
    county: str = ""
    municipality_id: str = ""
    municipality: str = ""
    production_area_code: str = ""
    symbol: str = ""
    species: str = ""
    company: str = ""
    site_url: str = ""
    external_site_url: str = ""
    permits: str = ""
    purpose: str = ""
    production_method: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hover_text: str = ""


def parse_capacity(value: str) -> float:
    """Parse a capacity figure, treating commas as thousands separators."""
    try:
        return float(value.replace(",", "").replace(" ", ""))
    except ValueError:
        return 0.0


def build_norway_hover_text(site: NorwegianSite) -> str:
    """Tooltip for a Norwegian site."""
    return build_hover_text(site.site_name, [
        ("Species", site.species),
        ("Company", site.company),
        ("County", site.county),
        ("Municipality", site.municipality),
        ("Purpose", site.purpose),
        ("Production Method", site.production_method),
        ("Status", site.site_status),
        ("Water Type", site.water_type),
        ("Placement", site.placement),
    ])


class NorwayIngester(BaseSiteIngester):
    """Ingester for the Norwegian aquaculture site register."""

    region_id = "norway"

    def parse_row(self, row: Row) -> NorwegianSite:
        species = translate_species_string(pick(row, "species", "arter"), NORWEGIAN_SPECIES)

        site = NorwegianSite(
            site_id=pick(row, "site id", "site_id"),
            site_name=pick(row, "name", "site_name", "site name"),
            site_status=pick(row, "site status", "site_status"),
            approval_date=pick(row, "approval date", "approval_date"),
            approval_type=pick(row, "approval type", "approval_type"),
            site_capacity=parse_capacity(pick(row, "site capacity", "site_capacity")),
            temporary_capacity=parse_capacity(pick(row, "temporary_capacity", "temporary capacity")),
            capacity_unit_type=pick(row, "capacity_unit_type", "capacity unit type"),
            placement=pick(row, "placement"),
            water_type=pick(row, "water_type", "water type"),
            site_details=pick(row, "site_details", "site details"),
            county=pick(row, "county"),
            municipality_id=pick(row, "municipality_id", "municipality id"),
            municipality=pick(row, "municipality"),
            production_area_code=pick(row, "production_area_code", "production area code"),
            symbol=pick(row, "symbol"),
            species=", ".join(normalize_species_list(species)),
            company=pick(row, "company"),
            site_url=pick(row, "site_url", "site url"),
            external_site_url=pick(row, "external_site_url", "external site url"),
            permits=pick(row, "permits"),
            purpose=pick(row, "purpose"),
            production_method=pick(row, "production_method", "production method"),
        )
        site.latitude, site.longitude = coerce_latlon(pick(row, "latitude"), pick(row, "longitude"))
        site.hover_text = build_norway_hover_text(site)
        return site

    def filter_options(self, sites: list[NorwegianSite]) -> dict[str, list[str]]:
        return {
            "species": extract_species_facet(s.species for s in sites),
            "companies": extract_facet(s.company for s in sites),
            "watertypes": extract_facet(s.water_type for s in sites),
            "regions": extract_facet(s.county for s in sites),
        }
