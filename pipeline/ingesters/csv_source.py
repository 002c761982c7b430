"""
CSV ingestion for regional site exports.

Rows come back as ``{header: cell}`` dicts in file order. Parsing is strict:
an unterminated quote or stray character after a closing quote is a
``ParseFailure``, never a silently mangled row.
"""

import csv
import io
from pathlib import Path

import httpx
from loguru import logger

from pipeline.errors import ParseFailure, SourceNotFound, SourceUnavailable
from pipeline.utils.http import HTTPError, fetch_with_retry

Row = dict[str, str]


def parse_csv_text(text: str, source: str = "<text>") -> list[Row]:
    """
    Parse CSV text with a header row into row dicts.

    Fully empty lines are skipped. Short rows are padded with "" and surplus
    cells beyond the header are dropped.

    Args:
        text: Decoded CSV content
        source: Name used in error messages and logs

    Returns:
        List of row dicts keyed by stripped header names

    Raises:
        ParseFailure: On structurally invalid CSV
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    header: list[str] | None = None
    rows: list[Row] = []

    try:
        for cells in reader:
            if not any(cell.strip() for cell in cells):
                continue

            if header is None:
                header = [cell.strip() for cell in cells]
                continue

            if len(cells) < len(header):
                cells = cells + [""] * (len(header) - len(cells))
            rows.append(dict(zip(header, cells)))
    except csv.Error as e:
        raise ParseFailure(f"Failed to parse CSV {source} (line {reader.line_num}): {e}")

    logger.debug(f"Parsed {len(rows):,} rows from {source}")
    return rows


def read_csv_rows(path: Path) -> list[Row]:
    """
    Read and parse a UTF-8 CSV file.

    Raises:
        SourceNotFound: If the file does not exist
        ParseFailure: If the file is not valid UTF-8 or not valid CSV
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFound(f"Data file not found: {path.name}")

    logger.info(f"Reading site data from {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseFailure(f"Failed to parse CSV {path.name}: not valid UTF-8 ({e})")

    return parse_csv_text(text, source=path.name)


def fetch_csv_rows(url: str) -> list[Row]:
    """
    Fetch and parse a CSV export over HTTP.

    Raises:
        SourceNotFound: On HTTP 404
        SourceUnavailable: On any other HTTP or transport failure
        ParseFailure: If the body is not valid UTF-8 or not valid CSV
    """
    logger.info(f"Fetching site data from {url}")
    try:
        response = fetch_with_retry(url)
    except HTTPError as e:
        if e.status_code == 404:
            raise SourceNotFound(f"Remote data file not found: {url}")
        raise SourceUnavailable(f"Failed to fetch {url}: {e}")
    except httpx.HTTPError as e:
        raise SourceUnavailable(f"Failed to fetch {url}: {e}")

    try:
        text = response.content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseFailure(f"Failed to parse CSV from {url}: not valid UTF-8 ({e})")

    return parse_csv_text(text, source=url)
