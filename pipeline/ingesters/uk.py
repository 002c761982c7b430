"""
UK aquaculture site ingester.

Reads the Scotland/England site register export. Positions are given as
British National Grid eastings/northings and converted to WGS84; rows that
already carry decimal latitude/longitude keep them.
"""

from dataclasses import dataclass
from typing import Optional

from pipeline.ingesters.base import BaseSiteIngester, SiteRecord, pick
from pipeline.ingesters.csv_source import Row
from pipeline.normalizers.coordinates import coerce_latlon, make_bng_transformer, osgrid_to_latlon
from pipeline.normalizers.facets import extract_facet, extract_species_facet
from pipeline.normalizers.hover import build_hover_text
from pipeline.normalizers.species import normalize_species_list


@dataclass
class UKSite(SiteRecord):
    site_name: str = ""
    facility_id: str = ""
    marine_scotland_site_id: str = ""
    species: str = ""
    stage: str = ""
    facility_type: str = ""
    number_of_facilities: str = ""
    facility_description: str = ""
    date_registered: str = ""
    nationalgridreference: str = ""
    local_authority: str = ""
    producing_in_last_3_years: str = ""
    site_address_1: str = ""
    site_address_2: str = ""
    site_address_3: str = ""
    site_post_code: str = ""
    site_contact_number: str = ""
    aquaculture_type: str = ""
    watertype: str = ""
    health_surveillance: str = ""
    ms_management_area: str = ""
    region: str = ""
    company: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hover_text: str = ""


# Text columns copied straight from the export (header == field name)
UK_TEXT_FIELDS = [
    "site_name",
    "facility_id",
    "marine_scotland_site_id",
    "stage",
    "facility_type",
    "number_of_facilities",
    "facility_description",
    "date_registered",
    "nationalgridreference",
    "local_authority",
    "producing_in_last_3_years",
    "site_address_1",
    "site_address_2",
    "site_address_3",
    "site_post_code",
    "site_contact_number",
    "aquaculture_type",
    "watertype",
    "health_surveillance",
    "ms_management_area",
    "region",
    "company",
]


def build_uk_hover_text(site: UKSite) -> str:
    """Tooltip for a UK site."""
    return build_hover_text(site.site_name, [
        ("Species", site.species),
        ("Company", site.company),
        ("Type", site.aquaculture_type),
        ("Water Type", site.watertype),
        ("Stage", site.stage),
        ("Region", site.region),
        ("Local Authority", site.local_authority),
        ("Health Surveillance", site.health_surveillance),
        ("Producing", site.producing_in_last_3_years),
        ("MS Management Area", site.ms_management_area),
    ])


class UKIngester(BaseSiteIngester):
    """
    Ingester for the UK aquaculture site register.

    One transformer is built per ingester instance; instances are created
    per request and never shared between threads.
    """

    region_id = "uk"

    def __init__(self):
        super().__init__()
        self.transformer = make_bng_transformer()

    def parse_row(self, row: Row) -> UKSite:
        site = UKSite(**{name: pick(row, name) for name in UK_TEXT_FIELDS})
        site.species = ", ".join(normalize_species_list(pick(row, "species")))

        lat, lon = coerce_latlon(pick(row, "latitude"), pick(row, "longitude"))
        if lat is None:
            lat, lon = osgrid_to_latlon(pick(row, "easting"), pick(row, "northing"), self.transformer)
        site.latitude, site.longitude = lat, lon

        site.hover_text = build_uk_hover_text(site)
        return site

    def filter_options(self, sites: list[UKSite]) -> dict[str, list[str]]:
        return {
            "species": extract_species_facet(s.species for s in sites),
            "companies": extract_facet(s.company for s in sites),
            "watertypes": extract_facet(s.watertype for s in sites),
            "regions": extract_facet(s.region for s in sites),
        }
