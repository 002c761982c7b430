# SPDX-License-Identifier: MIT
"""Tests for sites API endpoints."""

import pytest


class TestSitesEndpoint:
    """Test GET /api/sites."""

    def test_default_region_is_uk(self, sites_client):
        """Sites endpoint without a region serves the UK dataset."""
        response = sites_client.get("/api/sites")
        assert response.status_code == 200
        data = response.json()
        assert data["region"] == "uk"
        assert data["totalCount"] == 2
        assert data["validCount"] == 1

    def test_response_shape(self, sites_client):
        """Response carries sites, facets, counts, centre and colours."""
        data = sites_client.get("/api/sites", params={"region": "uk"}).json()
        assert set(data) == {
            "region", "sites", "filters", "totalCount", "validCount", "center", "companyColors",
        }
        assert data["filters"]["companies"] == ["Cooke Aquaculture", "Mowi Scotland"]
        assert data["companyColors"] == {
            "Cooke Aquaculture": "#1f77b4",
            "Mowi Scotland": "#ff7f0e",
        }

    def test_site_without_coordinates_omits_keys(self, sites_client):
        """Unplaced sites are kept but carry no latitude/longitude."""
        sites = sites_client.get("/api/sites", params={"region": "uk"}).json()["sites"]
        by_name = {site["site_name"]: site for site in sites}
        assert "latitude" in by_name["Loch Alpha"]
        assert "latitude" not in by_name["Bay Beta"]
        assert "longitude" not in by_name["Bay Beta"]

    def test_center_is_mean_of_placed_sites(self, sites_client):
        data = sites_client.get("/api/sites", params={"region": "uk"}).json()
        placed = [s for s in data["sites"] if "latitude" in s]
        assert data["center"]["latitude"] == pytest.approx(placed[0]["latitude"])
        assert data["center"]["longitude"] == pytest.approx(placed[0]["longitude"])

    def test_unknown_region_falls_back_to_uk(self, sites_client):
        data = sites_client.get("/api/sites", params={"region": "atlantis"}).json()
        assert data["region"] == "uk"

    def test_region_key_is_normalised(self, sites_client):
        data = sites_client.get("/api/sites", params={"region": "New-Brunswick"}).json()
        assert data["region"] == "newbrunswick"
        assert data["totalCount"] == 1

    def test_canada_combines_available_provinces(self, sites_client):
        data = sites_client.get("/api/sites", params={"region": "canada"}).json()
        assert data["region"] == "canada"
        assert data["totalCount"] == 5
        assert data["filters"]["provinces"] == [
            "British Columbia",
            "New Brunswick",
            "Newfoundland and Labrador",
            "Quebec",
        ]

    def test_missing_file_returns_404(self, sites_client):
        """Nova Scotia has no export in the fixture directory."""
        response = sites_client.get("/api/sites", params={"region": "novascotia"})
        assert response.status_code == 404
        assert response.json() == {"error": "Data file not found: nova-scotia.csv"}

    def test_malformed_csv_returns_500(self, sites_client, site_data_dir):
        (site_data_dir / "iceland-sites.csv").write_text('company,location\nArctic Fish,"Dyra"fjordur\n', encoding="utf-8")
        response = sites_client.get("/api/sites", params={"region": "iceland"})
        assert response.status_code == 500
        assert "error" in response.json()

    def test_unexpected_error_returns_500(self, sites_client, mocker):
        mocker.patch("api.routes.sites.build_map_data", side_effect=RuntimeError("boom"))
        response = sites_client.get("/api/sites")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to load site data"}

    def test_post_not_allowed(self, sites_client):
        response = sites_client.post("/api/sites")
        assert response.status_code == 405
        assert "error" in response.json()


class TestRegionsEndpoint:
    """Test GET /api/sites/regions."""

    def test_lists_regions(self, test_client):
        response = test_client.get("/api/sites/regions")
        assert response.status_code == 200
        data = response.json()
        assert data["default"] == "uk"
        ids = [region["id"] for region in data["regions"]]
        assert {"uk", "iceland", "norway", "canada", "quebec", "chile"} <= set(ids)


class TestDedicatedRegionEndpoints:
    """Test the per-region convenience routes."""

    def test_iceland_sites(self, sites_client):
        data = sites_client.get("/api/iceland-sites").json()
        assert data["region"] == "iceland"
        assert data["totalCount"] == 2
        assert data["filters"]["species"] == ["Atlantic Salmon", "Regnbogasilungur"]

    def test_norwegian_sites(self, sites_client):
        data = sites_client.get("/api/norwegian-sites").json()
        assert data["region"] == "norway"
        assert data["validCount"] == 1
        assert data["filters"]["regions"] == ["Nordland", "Troms"]

    def test_norwegian_sites_not_allowed_to_post(self, sites_client):
        response = sites_client.post("/api/norwegian-sites")
        assert response.status_code == 405

    def test_chile_sites(self, sites_client, chile_workbook):
        data = sites_client.get("/api/chile-sites").json()
        assert data["region"] == "chile"
        assert data["totalCount"] == 2
        assert data["filters"]["regions"] == ["Los Lagos"]

    def test_chile_sites_missing_workbook(self, sites_client):
        response = sites_client.get("/api/chile-sites")
        assert response.status_code == 404
        assert response.json() == {"error": "Data file not found: aquaculturesites_chile.xlsx"}
