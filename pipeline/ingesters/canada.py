"""
Canadian aquaculture site ingesters.

Each province publishes its own schema and coordinate representation:

- British Columbia: DFO combined facility tables, decimal degrees
- New Brunswick: provincial lease layer, Web Mercator x/y in metres
- Newfoundland and Labrador: licence list, degrees-minutes-seconds strings
- Nova Scotia: lease register, decimal degrees
- Quebec: marine aquaculture permits (French or translated headers),
  decimal centroid coordinates

All provinces normalise into the same CanadianSite record. ``CanadaIngester``
combines every province whose export is available.
"""

from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from pipeline.config import REGIONS
from pipeline.errors import SourceNotFound
from pipeline.ingesters.base import BaseSiteIngester, IngestResult, SiteRecord, pick
from pipeline.ingesters.csv_source import Row, read_csv_rows
from pipeline.normalizers.coordinates import coerce_latlon, dms_to_latlon, web_mercator_to_latlon
from pipeline.normalizers.facets import extract_facet, extract_species_facet
from pipeline.normalizers.hover import build_hover_text
from pipeline.normalizers.species import (
    FRENCH_SPECIES,
    classify_species,
    normalize_species_list,
    translate_species_string,
)


@dataclass
class CanadianSite(SiteRecord):
    site_id: str = ""
    site_name: str = ""
    company: str = ""
    species: str = ""
    species_type: str = ""
    site_type: str = ""
    water_type: str = ""
    province: str = ""
    region: str = ""
    licence_type: str = ""
    status: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hover_text: str = ""


def build_canada_hover_text(site: CanadianSite) -> str:
    """Tooltip for a Canadian site."""
    return build_hover_text(site.site_name or site.site_id, [
        ("Company", site.company),
        ("Species", site.species),
        ("Species Type", site.species_type),
        ("Site Type", site.site_type),
        ("Province", site.province),
        ("Region", site.region),
        ("Water Type", site.water_type),
        ("Licence Type", site.licence_type),
        ("Status", site.status),
        ("Site ID", site.site_id),
    ])


def canada_filter_options(sites: list[CanadianSite]) -> dict[str, list[str]]:
    """Facets shared by every Canadian dataset."""
    return {
        "companies": extract_facet(s.company for s in sites),
        "species": extract_species_facet(s.species for s in sites),
        "species_types": extract_facet(s.species_type for s in sites),
        "site_types": extract_facet(s.site_type for s in sites),
        "provinces": extract_facet(s.province for s in sites),
    }


class CanadianProvinceIngester(BaseSiteIngester):
    """
    Base class for a single Canadian province.

    Subclasses implement ``extract`` (row -> record fields) and
    ``coordinates`` (row -> lat/lon); everything else is shared.
    """

    default_water_type: str = ""

    @abstractmethod
    def extract(self, row: Row) -> dict[str, str]:
        """Map a raw row onto CanadianSite fields (species still raw)."""
        pass

    @abstractmethod
    def coordinates(self, row: Row) -> tuple[Optional[float], Optional[float]]:
        """WGS84 (lat, lon) for a raw row, or (None, None)."""
        pass

    def parse_row(self, row: Row) -> CanadianSite:
        fields = self.extract(row)
        species = normalize_species_list(fields.pop("species", ""))
        species_type = fields.pop("species_type", "")
        if not species_type:
            groups = []
            for name in species:
                group = classify_species(name)
                if group and group not in groups:
                    groups.append(group)
            species_type = ", ".join(groups)

        site = CanadianSite(
            species=", ".join(species),
            species_type=species_type,
            province=self.region_name,
            **fields,
        )
        if not site.water_type:
            site.water_type = self.default_water_type

        site.latitude, site.longitude = self.coordinates(row)
        site.hover_text = build_canada_hover_text(site)
        return site

    def filter_options(self, sites: list[CanadianSite]) -> dict[str, list[str]]:
        return canada_filter_options(sites)


class BritishColumbiaIngester(CanadianProvinceIngester):
    """DFO British Columbia facility tables (finfish, shellfish, land-based, enhancement)."""

    region_id = "britishcolumbia"

    def extract(self, row: Row) -> dict[str, str]:
        table_type = pick(row, "Table Type")
        return {
            "site_id": pick(row, "Facility reference number"),
            "site_name": pick(row, "Facility common name", "Facility common names"),
            "company": pick(row, "Operating group", "Licence holder"),
            "species": pick(row, "Licensed species"),
            "site_type": table_type,
            "water_type": "Land-based" if table_type.lower().startswith("land") else "",
            "region": pick(row, "Aquaculture management unit"),
            "licence_type": pick(row, "Licence type"),
        }

    def coordinates(self, row: Row):
        return coerce_latlon(pick(row, "Latitude"), pick(row, "Longitude"))


class NewBrunswickIngester(CanadianProvinceIngester):
    """New Brunswick combined shellfish/finfish lease layer."""

    region_id = "newbrunswick"
    default_water_type = "Marine"

    def extract(self, row: Row) -> dict[str, str]:
        return {
            "site_id": pick(row, "Site Number", "OBJECTID"),
            "site_name": pick(row, "Site Name", "Site Number"),
            "company": pick(row, "Name of Lease Holder/Permit Holder/Licence Holder", "Lease Holder"),
            "species": pick(row, "Species and Strain", "Species"),
            "species_type": pick(row, "Species Category"),
            "site_type": pick(row, "Cultivation Method"),
            "licence_type": pick(row, "AUTHORIZATION_TYPE", "Authorization Type"),
            "status": pick(row, "Expiry Date of Lease/Permit/Licence"),
        }

    def coordinates(self, row: Row):
        return web_mercator_to_latlon(
            pick(row, "x", "POINT_X", "Easting"),
            pick(row, "y", "POINT_Y", "Northing"),
        )


class NewfoundlandIngester(CanadianProvinceIngester):
    """Newfoundland and Labrador licence list with DMS coordinates."""

    region_id = "newfoundland"
    default_water_type = "Marine"

    def extract(self, row: Row) -> dict[str, str]:
        return {
            "site_id": pick(row, "Licence Number", "Licence No", "Site Number"),
            "site_name": pick(row, "Site Name", "Site Location"),
            "company": pick(row, "Licence Holder", "Company"),
            "species": pick(row, "Species"),
            "site_type": pick(row, "Site Type", "Type"),
            "region": pick(row, "Bay", "Region"),
            "licence_type": pick(row, "Licence Type"),
            "status": pick(row, "Status"),
        }

    def coordinates(self, row: Row):
        # Longitudes are often written without a hemisphere; the province is west of Greenwich
        return dms_to_latlon(pick(row, "Latitude"), pick(row, "Longitude"), default_lon_hemisphere="W")


class NovaScotiaIngester(CanadianProvinceIngester):
    """Nova Scotia aquaculture lease register."""

    region_id = "novascotia"
    default_water_type = "Marine"

    def extract(self, row: Row) -> dict[str, str]:
        return {
            "site_id": pick(row, "Site ID", "Site #", "Lease Number"),
            "site_name": pick(row, "Site Name", "Location"),
            "company": pick(row, "Lease Holder", "Licence Holder", "Company"),
            "species": pick(row, "Species"),
            "site_type": pick(row, "Cultivation Type", "Aquaculture Type"),
            "region": pick(row, "County"),
            "status": pick(row, "Status"),
        }

    def coordinates(self, row: Row):
        return coerce_latlon(pick(row, "Latitude", "Lat"), pick(row, "Longitude", "Long", "Lon"))


# Quebec export vocabulary (French -> English)
QUEBEC_REGIONS = {
    "Îles-de-la-Madeleine": "Magdalen Islands",
    "Gaspésie": "Gaspé",
    "Bas-Saint-Laurent": "Bas-Saint-Laurent",
    "Côte-Nord": "North Shore",
}

QUEBEC_ACTIVITIES = {
    "Élevage": "Farming",
    "Culture": "Culture",
    "Captage de naissain": "Seed Collection",
    "Captage": "Collection",
    "Récolte": "Harvest",
    "Activités de recherche et d'expérimentation": "Research and Experimentation Activities",
}


def translate_quebec(value: str, table: dict[str, str]) -> str:
    """Replace the first French term found in ``value`` with its English form."""
    if value in table:
        return table[value]
    for french, english in table.items():
        if french in value:
            return value.replace(french, english)
    return value


class QuebecIngester(CanadianProvinceIngester):
    """Quebec marine aquaculture permits."""

    region_id = "quebec"
    default_water_type = "Marine"

    def extract(self, row: Row) -> dict[str, str]:
        species = pick(row, "Authorized Species", "ESPÈCE AUTORISÉE")
        return {
            "site_id": pick(row, "Permit Number", "# de permis"),
            "site_name": pick(row, "Operating Sector", "SECTEUR D'EXPLOITATION", "Permit Number", "# de permis"),
            "company": pick(row, "Company Name", "Nom d'entreprise"),
            "species": translate_species_string(species, FRENCH_SPECIES),
            "site_type": translate_quebec(pick(row, "Activity Type", "TYPE D'ACTIVITÉ"), QUEBEC_ACTIVITIES),
            "region": translate_quebec(pick(row, "Region", "Région"), QUEBEC_REGIONS),
            "status": pick(row, "Permit Expired On", "PERMIS ÉCHU LE"),
        }

    def coordinates(self, row: Row):
        return coerce_latlon(
            pick(row, "Centroid Latitude", "LATITUDE Centroide", "Latitude 1", "LATITUDE 1"),
            pick(row, "Centroid Longitude", "LONGITUDE Centroide", "Longitude 1", "LONGITUDE 1"),
        )


PROVINCE_INGESTERS: dict[str, type[CanadianProvinceIngester]] = {
    "britishcolumbia": BritishColumbiaIngester,
    "newbrunswick": NewBrunswickIngester,
    "newfoundland": NewfoundlandIngester,
    "novascotia": NovaScotiaIngester,
    "quebec": QuebecIngester,
}


class CanadaIngester:
    """
    Combined ingester for all Canadian provinces.

    Reads each province with its own ingester and merges the records into a
    single result. Provinces whose export is missing are skipped with a
    warning; only when no province is available does loading fail.
    """

    region_id = "canada"
    region_name = REGIONS["canada"]["name"]

    def filter_options(self, sites: list[CanadianSite]) -> dict[str, list[str]]:
        return canada_filter_options(sites)

    def load(self, paths: dict[str, Path]) -> IngestResult:
        """
        Load and combine provincial exports.

        Args:
            paths: Province key -> CSV path

        Raises:
            SourceNotFound: If none of the provincial files exist
            ParseFailure: If any existing file is malformed
        """
        sites: list[CanadianSite] = []
        loaded = 0

        for province, path in paths.items():
            ingester = PROVINCE_INGESTERS[province]()
            try:
                rows = read_csv_rows(path)
            except SourceNotFound:
                logger.warning(f"Skipping {ingester.region_name}: data file not found ({path})")
                continue
            sites.extend(ingester.load_rows(rows).sites)
            loaded += 1

        if not loaded:
            raise SourceNotFound("No Canadian provincial data files found")

        logger.info(f"Canada: combined {len(sites):,} sites from {loaded} provinces")
        return IngestResult(region=self.region_id, sites=sites, filters=self.filter_options(sites))
