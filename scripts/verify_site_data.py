#!/usr/bin/env python3
"""
Site Data Quality Report.

Loads each configured regional export and reports:
- Row counts and coordinate coverage
- Coverage of the main text fields (company, species)
- Facet sizes
- Recommendations for fixes

Usage:
    python scripts/verify_site_data.py
    python scripts/verify_site_data.py --region quebec
    python scripts/verify_site_data.py --json > site_report.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

sys.path.insert(0, str(Path(__file__).parent.parent))

from pipeline.config import REGIONS
from pipeline.errors import SiteDataError
from pipeline.ingesters.base import IngestResult
from pipeline.map_data import ingest_region

# Text fields whose coverage is reported when the region's records have them
COVERAGE_FIELDS = ["company", "species"]


def field_coverage(result: IngestResult, field: str) -> int:
    """Count sites with a non-empty value for a field."""
    count = 0
    for site in result.sites:
        value = getattr(site, field, "")
        if value and value != "N/A":
            count += 1
    return count


def generate_region_report(region: str) -> Dict[str, Any]:
    """Generate quality report for a single region."""
    try:
        result = ingest_region(region)
    except SiteDataError as e:
        return {"region": region, "total": 0, "error": e.message, "status_code": e.status_code}

    total = result.total_count
    report = {
        "region": region,
        "total": total,
        "coverage": {"valid_coords": result.valid_count},
        "coverage_pct": {},
        "facets": {name: len(values) for name, values in result.filters.items()},
    }

    for field in COVERAGE_FIELDS:
        report["coverage"][field] = field_coverage(result, field)

    for field, count in report["coverage"].items():
        report["coverage_pct"][field] = round(100 * count / total, 1) if total else 0.0

    return report


def generate_recommendations(reports: List[Dict]) -> List[str]:
    """Generate recommendations based on region reports."""
    recommendations = []

    for report in reports:
        region = report["region"]
        if report.get("error"):
            recommendations.append(f"- {region}: {report['error']}")
            continue
        if report["total"] == 0:
            recommendations.append(f"- {region}: Export contains no rows")
            continue

        coverage = report["coverage_pct"]

        coords_pct = coverage.get("valid_coords", 0)
        if coords_pct < 95:
            recommendations.append(
                f"- {region}: Check coordinate columns ({coords_pct}% of sites can be placed on the map)"
            )

        species_pct = coverage.get("species", 0)
        if species_pct < 90:
            recommendations.append(
                f"- {region}: Review species column mapping ({species_pct}% coverage)"
            )

    return recommendations


def print_table(reports: List[Dict]):
    """Print summary table of all regions."""
    print("\n" + "=" * 80)
    print(f"{'Region':<18} {'Total':>10} {'Coords':>10} {'Company':>10} {'Species':>10} {'Facets':>14}")
    print("=" * 80)

    for report in reports:
        region = report["region"]
        if report.get("error"):
            print(f"{region:<18} {'(error)':>10}  {report['error'][:45]}")
            continue

        pct = report["coverage_pct"]
        facets = sum(report["facets"].values())
        print(
            f"{region:<18} {report['total']:>10,} {pct['valid_coords']:>9.1f}% "
            f"{pct['company']:>9.1f}% {pct['species']:>9.1f}% {facets:>14,}"
        )

    print("=" * 80)


def main():
    parser = argparse.ArgumentParser(description="Site Data Quality Report")
    parser.add_argument("--region", "-r", choices=list(REGIONS.keys()), help="Analyze a specific region only")
    parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args()

    regions = [args.region] if args.region else list(REGIONS.keys())
    logger.info(f"Analyzing {len(regions)} regions...")

    reports = []
    for region in regions:
        logger.info(f"  Processing {region}...")
        reports.append(generate_region_report(region))

    recommendations = generate_recommendations(reports)

    if args.json:
        output = {
            "reports": reports,
            "recommendations": recommendations,
            "summary": {
                "total_regions": len(reports),
                "total_sites": sum(r.get("total", 0) for r in reports),
            },
        }
        print(json.dumps(output, indent=2, default=str))
        return

    print_table(reports)

    if recommendations:
        print("\n" + "=" * 60)
        print("RECOMMENDATIONS")
        print("=" * 60)
        for rec in recommendations:
            print(rec)

    total_sites = sum(r.get("total", 0) for r in reports)
    print("\n" + "-" * 60)
    print(f"Total: {len(reports)} regions, {total_sites:,} sites")
    print("-" * 60)


if __name__ == "__main__":
    main()
