"""
Regional site ingesters.

Each ingester is responsible for reading one region's CSV export and
normalising it into site records plus filter facets.
"""

from pipeline.ingesters.base import BaseSiteIngester, IngestResult, SiteRecord, pick

# Europe
from pipeline.ingesters.uk import UKIngester, UKSite
from pipeline.ingesters.iceland import IcelandIngester, IcelandSite
from pipeline.ingesters.norway import NorwayIngester, NorwegianSite

# North America
from pipeline.ingesters.canada import (
    BritishColumbiaIngester,
    CanadaIngester,
    CanadianSite,
    NewBrunswickIngester,
    NewfoundlandIngester,
    NovaScotiaIngester,
    QuebecIngester,
)

# South America
from pipeline.ingesters.chile import ChileIngester, ChileSite

from pipeline.ingesters.registry import INGESTERS, get_ingester, resolve_region

__all__ = [
    # Base classes
    "BaseSiteIngester",
    "IngestResult",
    "SiteRecord",
    "pick",
    # Europe
    "UKIngester",
    "UKSite",
    "IcelandIngester",
    "IcelandSite",
    "NorwayIngester",
    "NorwegianSite",
    # North America
    "CanadaIngester",
    "CanadianSite",
    "BritishColumbiaIngester",
    "NewBrunswickIngester",
    "NewfoundlandIngester",
    "NovaScotiaIngester",
    "QuebecIngester",
    # South America
    "ChileIngester",
    "ChileSite",
    # Registry
    "INGESTERS",
    "get_ingester",
    "resolve_region",
]
