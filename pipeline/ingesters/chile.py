"""
Chilean aquaculture concession ingester.

The SUBPESCA concession register is published as an Excel workbook with
Spanish headers. Coordinates are a single DMS cell ("S 41°35´14.48,
W 73°37´45.16"), one vertex per line for polygon concessions. Species,
regions, species groups, concession types and statuses are translated to
English.
"""

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pipeline.ingesters.base import BaseSiteIngester, IngestResult, SiteRecord, pick
from pipeline.ingesters.csv_source import Row, read_csv_rows
from pipeline.ingesters.xlsx_source import read_xlsx_rows
from pipeline.normalizers.coordinates import dms_pair_to_latlon
from pipeline.normalizers.facets import extract_facet, extract_species_facet
from pipeline.normalizers.hover import build_hover_text
from pipeline.normalizers.species import (
    CHILE_SPECIES,
    normalize_species_list,
    split_species,
    translate_species_contains,
)
from pipeline.utils.text import clean_value

CHILE_REGIONS = {
    "REGIÓN DE ARICA Y PARINACOTA": "Arica and Parinacota",
    "REGIÓN DE TARAPACÁ": "Tarapacá",
    "REGIÓN DE ANTOFAGASTA": "Antofagasta",
    "REGIÓN DE ATACAMA": "Atacama",
    "REGIÓN DE COQUIMBO": "Coquimbo",
    "REGIÓN DE VALPARAÍSO": "Valparaíso",
    "REGIÓN DEL LIBERTADOR BERNARDO O'HIGGINS": "O'Higgins",
    "REGIÓN DEL MAULE": "Maule",
    "REGIÓN DE ÑUBLE": "Ñuble",
    "REGIÓN DEL BIOBÍO": "Bío Bío",
    "REGIÓN DE LA ARAUCANÍA": "Araucanía",
    "REGIÓN DE LOS RÍOS": "Los Ríos",
    "REGIÓN DE LOS LAGOS": "Los Lagos",
    "REGIÓN DE AISÉN DEL GENERAL CARLOS IBÁÑEZ DEL CAMPO": "Aysén",
    "REGIÓN DE MAGALLANES Y DE LA ANTÁRTICA CHILENA": "Magallanes",
}

CHILE_CONCESSION_TYPES = {
    "ACUÍCOLA": "Aquaculture",
    "ACUICOLA": "Aquaculture",
    "PESQUERA": "Fishing",
    "PESCA": "Fishing",
}

CHILE_SPECIES_GROUPS = {
    "PECES": "Fish",
    "PEZ": "Fish",
    "MOLUSCOS": "Shellfish",
    "MOLUSCO": "Shellfish",
    "CRUSTÁCEOS": "Crustaceans",
    "CRUSTACEOS": "Crustaceans",
    "ALGAS": "Seaweed",
    "ALGA": "Seaweed",
}

CHILE_STATUSES = {
    "VIGENTE": "Active",
    "EN TRÁMITE": "Pending",
    "EN TRAMITE": "Pending",
    "CADUCO": "Expired",
    "CADUCADO": "Expired",
    "RENOVACIÓN": "Renewal",
    "RENOVACION": "Renewal",
    "SUSPENDIDO": "Suspended",
    "SUSPENSIÓN": "Suspended",
}


def translate_chile(value, table: dict[str, str]) -> str:
    """Exact, case-insensitive lookup; unknown values pass through."""
    text = clean_value(value)
    return table.get(text.upper(), text)


def translate_chile_region(value) -> str:
    """
    Translate a region name.

    Besides the full official name, a cell may hold a longer label that
    contains it, or just its tail ("Los Lagos", "de los Lagos").
    """
    text = clean_value(value)
    if not text:
        return ""
    upper = text.upper()
    if upper in CHILE_REGIONS:
        return CHILE_REGIONS[upper]

    for spanish, english in CHILE_REGIONS.items():
        if spanish in upper:
            return english
        if re.search(rf"\b{re.escape(upper)}$", spanish):
            return english
    return text


def parse_area(value) -> Optional[float]:
    """Concession area in hectares; decimal commas ("12,5") are accepted."""
    text = clean_value(value).replace(" ", "")
    if "," in text and "." not in text:
        text = text.replace(",", ".")
    try:
        area = float(text)
    except ValueError:
        return None
    if not math.isfinite(area) or area <= 0:
        return None
    return area


@dataclass
class ChileSite(SiteRecord):
    site_id: str = ""
    concession_number: str = ""
    site_name: str = ""
    location: str = ""
    commune: str = ""
    region: str = ""
    company: str = ""
    species: str = ""
    species_type: str = ""
    concession_type: str = ""
    status: str = ""
    resolution: str = ""
    area_ha: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hover_text: str = ""


def build_chile_hover_text(site: ChileSite) -> str:
    """Tooltip for a Chilean concession."""
    title = site.location or (f"Site {site.site_id}" if site.site_id else "")
    return build_hover_text(title, [
        ("Concession No.", site.concession_number),
        ("Commune", site.commune),
        ("Region", site.region),
        ("Holder", site.company),
        ("Species", site.species),
        ("Type", site.species_type),
        ("Status", site.status),
        ("Concession", site.concession_type),
        ("Area", f"{site.area_ha:g} ha" if site.area_ha else None),
        ("Resolution", site.resolution),
    ])


class ChileIngester(BaseSiteIngester):
    """Ingester for the Chilean aquaculture concession register."""

    region_id = "chile"

    def parse_row(self, row: Row) -> ChileSite:
        translated = ", ".join(
            translate_species_contains(name, CHILE_SPECIES)
            for name in split_species(pick(row, "Especies"))
        )
        status = translate_chile(pick(row, "Estado", "Estado de Trámite"), CHILE_STATUSES)

        site = ChileSite(
            site_id=pick(row, "N° Pert", "Código de Centro", "OBJECTID"),
            concession_number=pick(row, "N° Pert"),
            site_name=pick(row, "Ubicación Geográfica", "NOMBRE SITIO"),
            location=pick(row, "Ubicación Geográfica"),
            commune=pick(row, "Comuna"),
            region=translate_chile_region(pick(row, "Región")),
            company=pick(row, "Nombre de Titular", "TITULAR"),
            species=", ".join(normalize_species_list(translated)),
            species_type=translate_chile(pick(row, "Grupo Especie"), CHILE_SPECIES_GROUPS),
            concession_type=translate_chile(pick(row, "Tipo Concesión"), CHILE_CONCESSION_TYPES),
            status=status or "Unknown",
            resolution=pick(row, "N° Resolución SUBPESCA"),
            area_ha=parse_area(pick(row, "Superficie (Há)", "Superficie (ha)")),
        )
        # The register covers the south-western hemisphere only
        site.latitude, site.longitude = dms_pair_to_latlon(
            pick(row, "Coordenadas Geográficas", "Coordenadas"),
            default_lat_hemisphere="S",
            default_lon_hemisphere="W",
        )
        site.hover_text = build_chile_hover_text(site)
        return site

    def filter_options(self, sites: list[ChileSite]) -> dict[str, list[str]]:
        return {
            "species": extract_species_facet(s.species for s in sites),
            "companies": extract_facet(s.company for s in sites),
            "statuses": extract_facet(s.status for s in sites),
            "regions": extract_facet(s.region for s in sites),
            "concession_types": extract_facet(s.concession_type for s in sites),
            "activity_types": extract_facet(s.species_type for s in sites),
        }

    def load(self, path: Path) -> IngestResult:
        """Read the register workbook (or a CSV export of it) and normalise it."""
        path = Path(path)
        if path.suffix.lower() == ".csv":
            return self.load_rows(read_csv_rows(path))
        return self.load_rows(read_xlsx_rows(path))
