"""
Iceland aquaculture site ingester.

The Icelandic licence export already carries decimal degrees, sometimes as
strings; they are coerced to floats.
"""

from dataclasses import dataclass
from typing import Optional

from pipeline.ingesters.base import BaseSiteIngester, SiteRecord, pick
from pipeline.ingesters.csv_source import Row
from pipeline.normalizers.coordinates import coerce_latlon
from pipeline.normalizers.facets import extract_facet, extract_species_facet
from pipeline.normalizers.hover import build_hover_text
from pipeline.normalizers.species import normalize_species_list
from pipeline.utils.text import is_missing


@dataclass
class IcelandSite(SiteRecord):
    company: str = ""
    id_number: str = ""
    location: str = ""
    species: str = ""
    maximal_allowed_biomass: str = ""
    valid_until: str = ""
    type: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hover_text: str = ""


def build_iceland_hover_text(site: IcelandSite) -> str:
    """Tooltip for an Iceland site."""
    biomass = None
    if not is_missing(site.maximal_allowed_biomass):
        biomass = f"{site.maximal_allowed_biomass} tonnes"

    return build_hover_text(site.location, [
        ("Company", site.company),
        ("ID", site.id_number),
        ("Species", site.species),
        ("Type", site.type),
        ("Max Biomass", biomass),
        ("Valid Until", site.valid_until),
    ])


class IcelandIngester(BaseSiteIngester):
    """Ingester for Icelandic aquaculture operating licences."""

    region_id = "iceland"

    def parse_row(self, row: Row) -> IcelandSite:
        site = IcelandSite(
            company=pick(row, "company"),
            id_number=pick(row, "id_number", "id"),
            location=pick(row, "location", "site_name", "name"),
            species=", ".join(normalize_species_list(pick(row, "species"))),
            maximal_allowed_biomass=pick(row, "maximal_allowed_biomass", "max_biomass"),
            valid_until=pick(row, "valid_until"),
            type=pick(row, "type"),
        )
        site.latitude, site.longitude = coerce_latlon(pick(row, "latitude"), pick(row, "longitude"))
        site.hover_text = build_iceland_hover_text(site)
        return site

    def filter_options(self, sites: list[IcelandSite]) -> dict[str, list[str]]:
        return {
            "companies": extract_facet(s.company for s in sites),
            "species": extract_species_facet(s.species for s in sites),
            "types": extract_facet(s.type for s in sites),
        }
