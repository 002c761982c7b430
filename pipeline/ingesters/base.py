"""
Base ingester class for regional site exports.

All region-specific ingesters inherit from BaseSiteIngester and implement
``parse_row`` (raw CSV row -> site record) and ``filter_options``
(site records -> facets).
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from pipeline.config import REGIONS
from pipeline.ingesters.csv_source import Row, read_csv_rows
from pipeline.normalizers.colors import company_colors
from pipeline.utils.geo import get_center, has_coordinates
from pipeline.utils.text import clean_value


def pick(row: Row, *names: str, default: str = "") -> str:
    """
    Return the first non-blank cell among candidate column names.

    Exact header matches are tried first, then a case-insensitive match, so
    "Site Name", "site name" and "SITE NAME" all resolve.
    """
    for name in names:
        value = clean_value(row.get(name))
        if value:
            return value

    lowered = {key.strip().lower(): cell for key, cell in row.items() if key is not None}
    for name in names:
        value = clean_value(lowered.get(name.lower()))
        if value:
            return value

    return default


class SiteRecord:
    """Mixin for site dataclasses.

    Subclasses are dataclasses declaring ``latitude``, ``longitude`` and
    ``hover_text`` alongside their region-specific fields.
    """

    latitude: float | None
    longitude: float | None
    hover_text: str

    def to_dict(self) -> dict[str, Any]:
        """Serialise for JSON; coordinates are omitted entirely when absent."""
        data = asdict(self)
        if not has_coordinates(self):
            data.pop("latitude", None)
            data.pop("longitude", None)
        return data


@dataclass
class IngestResult:
    """Normalised sites and facets for one region."""
    region: str
    sites: list[SiteRecord] = field(default_factory=list)
    filters: dict[str, list[str]] = field(default_factory=dict)

    @property
    def total_count(self) -> int:
        return len(self.sites)

    @property
    def valid_count(self) -> int:
        """Sites with usable coordinates (used for map centring)."""
        return sum(1 for site in self.sites if has_coordinates(site))

    def to_response(self) -> dict[str, Any]:
        """Build the JSON body returned by the sites API."""
        lat, lon = get_center(self.sites)
        return {
            "region": self.region,
            "sites": [site.to_dict() for site in self.sites],
            "filters": self.filters,
            "totalCount": self.total_count,
            "validCount": self.valid_count,
            "center": {"latitude": lat, "longitude": lon} if lat is not None else None,
            "companyColors": company_colors(self.filters.get("companies", [])),
        }


class BaseSiteIngester(ABC):
    """
    Abstract base class for regional site ingesters.

    Subclasses must implement:
    - parse_row(): Map one raw CSV row into a site record
    - filter_options(): Extract facets from the normalised records
    """

    # Class attributes to be set by subclasses
    region_id: str = None           # e.g., "uk"
    region_name: str = None         # e.g., "United Kingdom"

    def __init__(self):
        if self.region_id is None:
            raise ValueError("region_id must be set in subclass")

        self.region_info = REGIONS.get(self.region_id, {})
        self.region_name = self.region_name or self.region_info.get("name", self.region_id)

    @abstractmethod
    def parse_row(self, row: Row) -> SiteRecord:
        """
        Normalise one raw row.

        Must never raise on bad cell values: unconvertible coordinates
        leave latitude/longitude as None.
        """
        pass

    @abstractmethod
    def filter_options(self, sites: list[SiteRecord]) -> dict[str, list[str]]:
        """Extract sorted, de-duplicated facet lists from normalised sites."""
        pass

    def load_rows(self, rows: Iterable[Row]) -> IngestResult:
        """Normalise already-parsed rows and extract facets."""
        sites = [self.parse_row(row) for row in rows]
        result = IngestResult(region=self.region_id, sites=sites, filters=self.filter_options(sites))

        missing = result.total_count - result.valid_count
        if missing:
            logger.warning(f"{self.region_name}: {missing:,} of {result.total_count:,} sites have no usable coordinates")
        logger.info(f"{self.region_name}: normalised {result.total_count:,} sites")
        return result

    def load(self, path: Path) -> IngestResult:
        """Read a CSV export from disk and normalise it."""
        return self.load_rows(read_csv_rows(path))
