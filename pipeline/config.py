"""
Configuration management for the aquaculture site data service.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SiteDataSettings(BaseSettings):
    """Locations of the regional site exports.

    Each region reads exactly one configured file. Relative paths are
    resolved against ``data_dir``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SITES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("./data"))

    uk_csv: Path = Path("aquaculture-sites.csv")
    iceland_csv: Path = Path("iceland-sites.csv")
    norway_csv: Path = Path("norwegian-sites.csv")

    # Canadian provinces
    britishcolumbia_csv: Path = Path("canada/british-columbia.csv")
    newbrunswick_csv: Path = Path("canada/new-brunswick.csv")
    newfoundland_csv: Path = Path("canada/newfoundland.csv")
    novascotia_csv: Path = Path("canada/nova-scotia.csv")
    quebec_csv: Path = Path("canada/quebec.csv")

    # Chile publishes an Excel workbook
    chile_xlsx: Path = Path("chile/aquaculturesites_chile.xlsx")

    # Optional remote export for Norway (read from disk when unset)
    norway_remote_url: Optional[str] = None

    def path_for(self, region: str) -> Path:
        """Resolve the configured export path for a region key."""
        configured = getattr(self, f"{region}_csv", None) or getattr(self, f"{region}_xlsx")
        return self._resolve(configured)

    def locate(self, region: str) -> Path:
        """
        Find the export for a region.

        The configured path wins when it exists; otherwise the known
        alternative file names are tried in order. When nothing exists the
        configured path is returned so the caller reports it as missing.
        """
        primary = self.path_for(region)
        if primary.is_file():
            return primary

        for name in FALLBACK_FILENAMES.get(region, []):
            candidate = self._resolve(name)
            if candidate.is_file():
                return candidate

        return primary

    def _resolve(self, path) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = Path(self.data_dir) / path
        return path


class PipelineSettings(BaseSettings):
    """Data pipeline settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging (stderr always; a rotating file when log_file is set)
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    log_rotation: str = "10 MB"
    log_retention: str = "1 week"

    # HTTP settings
    http_timeout: int = 30  # seconds
    http_max_retries: int = 3
    http_retry_delay: float = 1.0  # seconds


class APISettings(BaseSettings):
    """API server settings."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


class Settings(BaseSettings):
    """Main settings class that combines all settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-settings
    sites: SiteDataSettings = Field(default_factory=SiteDataSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    api: APISettings = Field(default_factory=APISettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for quick access
settings = get_settings()


# =============================================================================
# Region Configuration
# =============================================================================

DEFAULT_REGION = "uk"

CANADIAN_PROVINCES = [
    "britishcolumbia",
    "newbrunswick",
    "newfoundland",
    "novascotia",
    "quebec",
]

REGIONS = {
    "uk": {
        "name": "United Kingdom",
        "description": "Scottish and English aquaculture sites (British National Grid)",
    },
    "iceland": {
        "name": "Iceland",
        "description": "Icelandic aquaculture operating licences",
    },
    "norway": {
        "name": "Norway",
        "description": "Norwegian aquaculture site register",
    },
    "canada": {
        "name": "Canada",
        "description": "All Canadian provincial aquaculture datasets combined",
    },
    "britishcolumbia": {
        "name": "British Columbia",
        "description": "DFO marine finfish, shellfish, land-based and enhancement facilities",
    },
    "newbrunswick": {
        "name": "New Brunswick",
        "description": "New Brunswick shellfish and finfish leases (Web Mercator)",
    },
    "newfoundland": {
        "name": "Newfoundland and Labrador",
        "description": "Newfoundland aquaculture licences (degrees-minutes-seconds)",
    },
    "novascotia": {
        "name": "Nova Scotia",
        "description": "Nova Scotia aquaculture leases",
    },
    "quebec": {
        "name": "Quebec",
        "description": "Quebec marine aquaculture permits",
    },
    "chile": {
        "name": "Chile",
        "description": "Chilean aquaculture concessions (SUBPESCA register workbook)",
    },
}

# Alternative file names the regional exports are published under, tried in
# order when the configured file is absent
FALLBACK_FILENAMES = {
    "iceland": ["iceland_aquaculture_sites/iceland-sites.csv"],
    "norway": [
        "Norweigan_aquaculture_site_locations_030126.csv",
        "norwegian-sites-2.csv",
    ],
    "britishcolumbia": ["canada/combined-all-tables.csv"],
    "newbrunswick": ["canada/combined_new_brunswick_all.csv"],
    "quebec": [
        "canada/quebec_marine_aquaculture_sites_2017_070126_translated.csv",
        "canada/quebec_marine_aquaculture_sites_2017_070126.csv",
    ],
    "chile": ["chile_aquaculture_site_100126/aquaculturesites_chile_100126.xlsx"],
}
