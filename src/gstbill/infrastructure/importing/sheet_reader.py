"""Decode the first sheet of an uploaded price list into row mappings.

``.xlsx`` workbooks are read with openpyxl; anything that is not a zip
container is tried as UTF-8 CSV.  The first row holds the headers; each
following non-empty row becomes a ``{header: value}`` dict with empty
cells left out.
"""

from __future__ import annotations

import csv
import io
import logging
import zipfile
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from gstbill.application.catalog_parsing import (
    ParsedBatch,
    ParseFailure,
    ParseRequest,
    ParseResult,
)
from gstbill.domain.exceptions import SpreadsheetParseError
from gstbill.domain.service.catalog_row_normalizer import CatalogRowNormalizer

logger = logging.getLogger("gstbill.import")

_ZIP_MAGIC = b"PK\x03\x04"
_OLE_MAGIC = b"\xd0\xcf\x11\xe0"


def _rows_from_table(table: list[tuple[Any, ...]]) -> list[dict[str, Any]]:
    if not table:
        return []
    headers = [
        str(h).strip() if h is not None and str(h).strip() else None
        for h in table[0]
    ]
    rows: list[dict[str, Any]] = []
    for values in table[1:]:
        row: dict[str, Any] = {}
        for header, value in zip(headers, values):
            if header is None or header in row:
                continue
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            row[header] = value
        if row:
            rows.append(row)
    return rows


def _read_xlsx(data: bytes) -> list[dict[str, Any]]:
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError,
            SyntaxError, OSError) as exc:
        raise SpreadsheetParseError(f"Unreadable workbook: {exc}") from exc
    try:
        if not workbook.worksheets:
            raise SpreadsheetParseError("Workbook has no sheets")
        sheet = workbook.worksheets[0]
        # read_only sheets are parsed lazily, so broken XML surfaces here
        table = [tuple(r) for r in sheet.iter_rows(values_only=True)]
    except (SyntaxError, zipfile.BadZipFile, KeyError, ValueError, TypeError,
            OSError) as exc:
        raise SpreadsheetParseError(f"Unreadable worksheet: {exc}") from exc
    finally:
        workbook.close()
    return _rows_from_table(table)


def _read_csv(data: bytes) -> list[dict[str, Any]]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SpreadsheetParseError("File is neither an .xlsx workbook nor UTF-8 CSV") from exc
    try:
        table = [tuple(r) for r in csv.reader(io.StringIO(text))]
    except csv.Error as exc:
        raise SpreadsheetParseError(f"Malformed CSV: {exc}") from exc
    return _rows_from_table(table)


def read_rows(data: bytes) -> list[dict[str, Any]]:
    """Return the data rows of the first sheet in *data*."""
    if not data:
        raise SpreadsheetParseError("File is empty")
    if data.startswith(_ZIP_MAGIC):
        return _read_xlsx(data)
    if data.startswith(_OLE_MAGIC):
        raise SpreadsheetParseError(
            "Legacy .xls workbooks are not supported, save the file as .xlsx"
        )
    return _read_csv(data)


def parse_catalog(request: ParseRequest) -> ParseResult:
    """Entry point of the parsing context: decode, normalize, filter.

    Always answers with exactly one message.
    """
    try:
        rows = read_rows(request.data)
    except SpreadsheetParseError as exc:
        logger.warning("Could not parse %s: %s", request.filename or "upload", exc)
        return ParseFailure(message=str(exc))

    records = CatalogRowNormalizer().normalize_all(rows)
    logger.info(
        "Parsed %s: %d rows, %d valid products",
        request.filename or "upload", len(rows), len(records),
    )
    return ParsedBatch(records=records, total_rows=len(rows))
