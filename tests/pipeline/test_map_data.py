# SPDX-License-Identifier: MIT
"""Tests for the map data service."""

import pytest

from pipeline.config import Settings, SiteDataSettings
from pipeline.errors import ParseFailure, SourceNotFound, SourceUnavailable
from pipeline.map_data import build_map_data, ingest_region


class TestBuildMapData:
    """Test the region response payload."""

    def test_uk_response(self, site_settings):
        data = build_map_data("uk", site_settings)

        assert data["region"] == "uk"
        assert data["totalCount"] == 2
        assert data["validCount"] == 1
        assert data["center"]["latitude"] == pytest.approx(data["sites"][0]["latitude"])
        assert list(data["companyColors"]) == data["filters"]["companies"]

    def test_unknown_region_falls_back(self, site_settings):
        assert build_map_data("atlantis", site_settings)["region"] == "uk"

    def test_center_none_without_placed_sites(self, tmp_path):
        (tmp_path / "iceland-sites.csv").write_text("company,location\nArctic Fish,Dyrafjordur\n", encoding="utf-8")
        settings = Settings(sites=SiteDataSettings(data_dir=tmp_path))

        data = build_map_data("iceland", settings)
        assert data["totalCount"] == 1
        assert data["validCount"] == 0
        assert data["center"] is None

    def test_header_only_file(self, tmp_path):
        (tmp_path / "iceland-sites.csv").write_text("company,location\n", encoding="utf-8")
        settings = Settings(sites=SiteDataSettings(data_dir=tmp_path))

        data = build_map_data("iceland", settings)
        assert data["sites"] == []
        assert data["filters"] == {"companies": [], "species": [], "types": []}
        assert data["companyColors"] == {}

    def test_absolute_path_is_not_joined(self, tmp_path, site_data_dir):
        settings = Settings(sites=SiteDataSettings(
            data_dir=tmp_path / "elsewhere",
            uk_csv=site_data_dir / "aquaculture-sites.csv",
        ))
        assert build_map_data("uk", settings)["totalCount"] == 2


class TestIngestRegionErrors:
    """Test error propagation."""

    def test_missing_file_sets_region(self, empty_settings):
        with pytest.raises(SourceNotFound) as exc_info:
            ingest_region("norway", empty_settings)
        assert exc_info.value.region == "norway"

    def test_malformed_file(self, tmp_path):
        (tmp_path / "norwegian-sites.csv").write_text('name,species\n"Langoya"x,Laks\n', encoding="utf-8")
        settings = Settings(sites=SiteDataSettings(data_dir=tmp_path))

        with pytest.raises(ParseFailure):
            ingest_region("norway", settings)

    def test_canada_without_any_province(self, empty_settings):
        with pytest.raises(SourceNotFound):
            ingest_region("canada", empty_settings)


class TestNorwayRemote:
    """Test the optional remote Norwegian export."""

    def test_remote_url_is_used(self, mocker, empty_settings):
        empty_settings.sites.norway_remote_url = "https://example.org/norway.csv"
        fetch = mocker.patch(
            "pipeline.map_data.fetch_csv_rows",
            return_value=[{"name": "Langoya", "species": "Laks", "latitude": "67.28", "longitude": "14.38"}],
        )

        result = ingest_region("norway", empty_settings)

        fetch.assert_called_once_with("https://example.org/norway.csv")
        assert result.sites[0].species == "Salmon"
        assert result.valid_count == 1

    def test_remote_failure(self, mocker, empty_settings):
        empty_settings.sites.norway_remote_url = "https://example.org/norway.csv"
        mocker.patch("pipeline.map_data.fetch_csv_rows", side_effect=SourceUnavailable("Failed to fetch"))

        with pytest.raises(SourceUnavailable) as exc_info:
            ingest_region("norway", empty_settings)
        assert exc_info.value.status_code == 502
        assert exc_info.value.region == "norway"


class TestFallbackFilenames:
    """Test alternative export names."""

    def test_alternative_name_used(self, tmp_path):
        (tmp_path / "norwegian-sites-2.csv").write_text("name,species\nLangoya,Laks\n", encoding="utf-8")
        settings = Settings(sites=SiteDataSettings(data_dir=tmp_path))

        assert settings.sites.locate("norway") == tmp_path / "norwegian-sites-2.csv"
        assert ingest_region("norway", settings).total_count == 1

    def test_configured_path_wins(self, site_settings, site_data_dir):
        (site_data_dir / "norwegian-sites-2.csv").write_text("name\nOther\n", encoding="utf-8")
        assert site_settings.sites.locate("norway") == site_data_dir / "norwegian-sites.csv"

    def test_missing_everywhere_reports_configured_name(self, empty_settings):
        with pytest.raises(SourceNotFound) as exc_info:
            ingest_region("quebec", empty_settings)
        assert exc_info.value.message == "Data file not found: quebec.csv"
