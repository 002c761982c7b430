#!/usr/bin/env python3
"""
Aquaculture site data pipeline entry point.

Inspect the configured regional exports from the command line.

Usage:
    python -m pipeline.main regions
    python -m pipeline.main status
    python -m pipeline.main preview norway --limit 20
    python -m pipeline.main export canada -o canada.json
"""

import json
from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from pipeline.config import CANADIAN_PROVINCES, REGIONS, get_settings
from pipeline.errors import SiteDataError
from pipeline.map_data import build_map_data, ingest_region
from pipeline.utils.geo import has_coordinates
from pipeline.utils.logging import setup_logging


console = Console()


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Aquaculture site data pipeline"""
    if debug:
        setup_logging(level="DEBUG")


@cli.command()
def regions():
    """List all region keys and where their data is read from."""
    console.print("\n[bold blue]Available Regions[/bold blue]\n")

    sites_config = get_settings().sites

    table = Table()
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Source")

    for region_id, info in REGIONS.items():
        if region_id == "canada":
            source = f"{len(CANADIAN_PROVINCES)} provincial files"
        elif region_id == "norway" and sites_config.norway_remote_url:
            source = sites_config.norway_remote_url
        else:
            source = str(sites_config.locate(region_id))
        table.add_row(region_id, info["name"], source)

    console.print(table)


@cli.command()
def status():
    """Load every region and report row counts and coordinate coverage."""
    console.print("\n[bold blue]Site Data Status[/bold blue]\n")

    table = Table()
    table.add_column("Region")
    table.add_column("Status")
    table.add_column("Sites")
    table.add_column("With Coordinates")
    table.add_column("Companies")

    for region_id in REGIONS:
        try:
            result = ingest_region(region_id)
        except SiteDataError as e:
            table.add_row(region_id, f"[red]{type(e).__name__}[/red]", "-", "-", e.message[:50])
            continue

        coverage = f"{result.valid_count / result.total_count * 100:.1f}%" if result.total_count else "N/A"
        table.add_row(
            region_id,
            "[green]OK[/green]",
            str(result.total_count),
            f"{result.valid_count} ({coverage})",
            str(len(result.filters.get("companies", []))),
        )

    console.print(table)


@cli.command()
@click.argument("region", type=click.Choice(list(REGIONS.keys())))
@click.option("--limit", type=int, default=10, help="Number of records to show")
def preview(region: str, limit: int):
    """Preview normalised records for a region."""
    console.print(f"\n[bold blue]Preview: {region}[/bold blue]\n")

    try:
        result = ingest_region(region)
    except SiteDataError as e:
        console.print(f"[red]Error loading {region}: {e.message}[/red]")
        raise SystemExit(1)

    table = Table()
    table.add_column("Name")
    table.add_column("Company")
    table.add_column("Species")
    table.add_column("Lat")
    table.add_column("Lon")

    for site in result.sites[:limit]:
        data = site.to_dict()
        name = data.get("site_name") or data.get("location") or data.get("site_id") or "-"
        if has_coordinates(site):
            lat, lon = f"{site.latitude:.4f}", f"{site.longitude:.4f}"
        else:
            lat, lon = "-", "-"
        table.add_row(
            name[:40],
            (data.get("company") or "-")[:30],
            (data.get("species") or "-")[:30],
            lat,
            lon,
        )

    console.print(table)
    console.print(f"\n[dim]Showing {min(limit, result.total_count)} of {result.total_count} records[/dim]")

    console.print("\n[bold]Filters[/bold]")
    for name, values in result.filters.items():
        console.print(f"  {name}: {len(values)}")


@cli.command()
@click.argument("region")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None, help="Write JSON to a file instead of stdout")
def export(region: str, output: Path | None):
    """Export the API response for a region as JSON."""
    try:
        data = build_map_data(region)
    except SiteDataError as e:
        logger.error(f"Export failed: {e.message}")
        raise SystemExit(1)

    payload = json.dumps(data, ensure_ascii=False, indent=2)
    if output is None:
        click.echo(payload)
        return

    output.write_text(payload, encoding="utf-8")
    console.print(f"[green]Wrote {data['totalCount']} sites for {data['region']} to {output}[/green]")


if __name__ == "__main__":
    cli()
