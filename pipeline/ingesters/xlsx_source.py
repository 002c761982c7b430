"""
Excel workbook ingestion.

Some registers are only published as ``.xlsx`` workbooks. The first sheet
is read with openpyxl and returned in the same ``{header: cell}`` shape as
the CSV reader, with every cell rendered as text.
"""

import zipfile
from pathlib import Path

import openpyxl
from loguru import logger
from openpyxl.utils.exceptions import InvalidFileException

from pipeline.errors import ParseFailure, SourceNotFound
from pipeline.ingesters.csv_source import Row


def cell_text(value) -> str:
    """Render a worksheet cell the way it reads in a CSV export."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def read_xlsx_rows(path: Path) -> list[Row]:
    """
    Read the first worksheet of an Excel workbook.

    The first non-empty row is the header. Fully empty rows are skipped,
    short rows are padded with "" and cells beyond the header are dropped.

    Raises:
        SourceNotFound: If the file does not exist
        ParseFailure: If the file is not a readable workbook
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFound(f"Data file not found: {path.name}")

    logger.info(f"Reading site data from {path}")
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        raise ParseFailure(f"Failed to read workbook {path.name}: {e}")

    header: list[str] | None = None
    rows: list[Row] = []

    try:
        sheet = wb.worksheets[0]
        logger.debug(f"Parsing sheet: {sheet.title}")

        for values in sheet.iter_rows(values_only=True):
            cells = [cell_text(value) for value in values]
            if not any(cell.strip() for cell in cells):
                continue

            if header is None:
                header = [cell.strip() for cell in cells]
                continue

            if len(cells) < len(header):
                cells = cells + [""] * (len(header) - len(cells))
            rows.append(dict(zip(header, cells)))
    finally:
        wb.close()

    logger.debug(f"Parsed {len(rows):,} rows from {path.name}")
    return rows
