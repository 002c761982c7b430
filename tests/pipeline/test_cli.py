# SPDX-License-Identifier: MIT
"""Tests for the pipeline command line."""

import json

import pytest
from click.testing import CliRunner

from pipeline.main import cli


@pytest.fixture
def runner(mocker, site_settings):
    """CLI runner reading the fixture data directory."""
    mocker.patch("pipeline.main.get_settings", return_value=site_settings)
    mocker.patch("pipeline.map_data.get_settings", return_value=site_settings)
    return CliRunner()


class TestCli:

    def test_regions(self, runner):
        result = runner.invoke(cli, ["regions"])
        assert result.exit_code == 0
        assert "Available Regions" in result.output

    def test_preview(self, runner):
        result = runner.invoke(cli, ["preview", "uk", "--limit", "1"])
        assert result.exit_code == 0
        assert "Loch Alpha" in result.output

    def test_preview_missing_region_file(self, runner):
        result = runner.invoke(cli, ["preview", "novascotia"])
        assert result.exit_code == 1

    def test_export_to_file(self, runner, tmp_path):
        output = tmp_path / "uk.json"
        result = runner.invoke(cli, ["export", "uk", "-o", str(output)])
        assert result.exit_code == 0

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["totalCount"] == 2
        assert data["filters"]["companies"] == ["Cooke Aquaculture", "Mowi Scotland"]
