# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for the aquaculture site data tests."""

import os
import pytest
from pathlib import Path
from typing import Generator

# Set test environment variables before importing app
os.environ.setdefault("DISABLE_LOGGING", "1")


UK_CSV = """site_name,company,species,watertype,region,aquaculture_type,easting,northing
Loch Alpha,Mowi Scotland,4: Atlantic salmon,Seawater,Highland,Fish,258000,665000
Bay Beta,Cooke Aquaculture,Mussels,N/A,Shetland,Shellfish,,
"""

ICELAND_CSV = """company,id_number,location,species,maximal_allowed_biomass,valid_until,type,latitude,longitude
Arctic Fish,FE-1101,Dyrafjordur,Salmo salar,"5,300",2030-01-01,Sea cage,65.88,-23.45
Kaldvik,FE-1102,Berufjordur,Regnbogasilungur,,2028-06-30,Sea cage,"64,75",-14.35
"""

NORWAY_CSV = """site id,name,site status,site capacity,county,municipality,species,company,water_type,latitude,longitude
12345,Langoya,KLARERT,"3,120",Nordland,Bodo,Laks;Regnbueørret,Mowi ASA,Saltvann,67.28,14.38
12346,Skjervoy,KLARERT,780,Troms,Skjervoy,Blåskjell,Nordic Shellfish,Saltvann,0,0
"""

BRITISH_COLUMBIA_CSV = """Table Type,Facility reference number,Licence type,Licence holder,Operating group,Facility common name,Licensed species,Latitude,Longitude,Aquaculture management unit
Marine Finfish,1234,Marine Finfish Aquaculture,Mowi Canada West Inc.,Mowi,Dixon Bay,Atlantic Salmon,49.36,-126.15,Area 25
Land-based,5678,Freshwater Aquaculture,Taste of BC Aquafarms,,Nanaimo Farm,Steelhead,49.17,-123.94,Freshwater
"""

NEW_BRUNSWICK_CSV = """Site Number,AUTHORIZATION_TYPE,Name of Lease Holder/Permit Holder/Licence Holder,Expiry Date of Lease/Permit/Licence,Cultivation Method,Species and Strain,Species Category,x,y
MS-0001,Lease,Acadian Mussel Co,2031-12-31,Suspended,Blue mussel,Shellfish,-7300000,5800000
"""

NEWFOUNDLAND_CSV = '''Licence Number,Site Name,Licence Holder,Species,Licence Type,Bay,Status,Latitude,Longitude
1001,Long Harbour,Cold Ocean Salmon,Atlantic Salmon & Steelhead,Finfish,Bay d'Espoir,Active,"47° 45' 00"" N",55 30 00
'''

QUEBEC_CSV = """# de permis,Nom d'entreprise,Région,ESPÈCE AUTORISÉE,TYPE D'ACTIVITÉ,LATITUDE Centroide,LONGITUDE Centroide
QC-501,Moules de Gaspé Inc,Gaspésie,Moule bleue,Élevage,"48,83",-64.48
"""

CHILE_HEADER = [
    "OBJECTID", "N° Pert", "Ubicación Geográfica", "Comuna", "Región", "Nombre de Titular",
    "Especies", "Grupo Especie", "Tipo Concesión", "Estado", "N° Resolución SUBPESCA",
    "Superficie (Há)", "Coordenadas Geográficas",
]

CHILE_ROWS = [
    [
        1, 102101, "Estero Castro", "Castro", "REGIÓN DE LOS LAGOS", "Salmones Camanchaca S.A.",
        "SALMON ATLANTICO, TRUCHA ARCOIRIS", "PECES", "ACUÍCOLA", "VIGENTE", "1234", 12.5,
        "S 42°28´30.0000, W 73°45´00.0000\nS 42°28´40.0000, W 73°45´10.0000",
    ],
    [None] * 13,
    [
        2, 102102, None, "Calbuco", "Los Lagos", "Mitilidos del Sur Ltda",
        "CHORITO", "MOLUSCOS", "ACUICOLA", None, None, "3,2", "sin coordenadas",
    ],
]


SITE_FILES = {
    "aquaculture-sites.csv": UK_CSV,
    "iceland-sites.csv": ICELAND_CSV,
    "norwegian-sites.csv": NORWAY_CSV,
    "canada/british-columbia.csv": BRITISH_COLUMBIA_CSV,
    "canada/new-brunswick.csv": NEW_BRUNSWICK_CSV,
    "canada/newfoundland.csv": NEWFOUNDLAND_CSV,
    # Nova Scotia deliberately absent
    "canada/quebec.csv": QUEBEC_CSV,
}


def write_csv(path: Path, text: str) -> Path:
    """Write CSV text to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_chile_workbook(path: Path) -> Path:
    """Save the Chilean fixture register as an Excel workbook."""
    import openpyxl

    wb = openpyxl.Workbook()
    sheet = wb.active
    sheet.title = "Concesiones"
    sheet.append(CHILE_HEADER)
    for row in CHILE_ROWS:
        sheet.append(row)

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture
def site_data_dir(tmp_path) -> Path:
    """Data directory populated with one small CSV export per region (Chile excepted)."""
    for name, text in SITE_FILES.items():
        write_csv(tmp_path / name, text)
    return tmp_path


@pytest.fixture
def chile_workbook(site_data_dir) -> Path:
    """Chilean register workbook at its configured location."""
    return write_chile_workbook(site_data_dir / "chile" / "aquaculturesites_chile.xlsx")


@pytest.fixture
def site_settings(site_data_dir):
    """Settings pointing at the fixture data directory."""
    from pipeline.config import Settings, SiteDataSettings

    return Settings(sites=SiteDataSettings(data_dir=site_data_dir))


@pytest.fixture
def empty_settings(tmp_path):
    """Settings pointing at a data directory with no exports."""
    from pipeline.config import Settings, SiteDataSettings

    empty = tmp_path / "empty"
    empty.mkdir()
    return Settings(sites=SiteDataSettings(data_dir=empty))


@pytest.fixture
def test_client() -> Generator:
    """Create a test client for the FastAPI application."""
    from fastapi.testclient import TestClient
    from api.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def sites_client(site_settings) -> Generator:
    """Test client whose routes read the fixture data directory."""
    from fastapi.testclient import TestClient
    from api.main import app
    from pipeline.config import get_settings

    app.dependency_overrides[get_settings] = lambda: site_settings
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
