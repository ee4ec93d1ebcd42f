"""
Loader for daily plant operating sheets (CSV or Excel).

Layout
------
- One sheet (Excel: the first worksheet), first row = header.
- One row per plant per day.
- Header labels are the fixed vocabulary in config.FIELD_LABEL_MAP plus
  "Plant Name" and "Date". Unknown columns are ignored; missing columns
  read as 0.
- Date cells may be text, Excel date cells or raw serial numbers.
"""

import csv
import io
import logging
import zipfile
from pathlib import Path
from typing import Any, BinaryIO, Mapping

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from ..config import (
    DATE_LABEL,
    FIELD_LABEL_MAP,
    PLANT_LABEL,
    UNKNOWN_DATE,
    UNKNOWN_PLANT,
)
from ..records import RawRecord
from .utils import normalise_date, safe_float

logger = logging.getLogger(__name__)

_TEXT_SUFFIXES = {".csv", ".txt"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}

# Rows with fewer delimited values than this are skipped
_MIN_ROW_VALUES = 2


class IngestionError(Exception):
    """Raised when a source file cannot be read as a plant data sheet."""


def _parse_plant(val: Any) -> str:
    if val is None:
        return UNKNOWN_PLANT
    text = str(val).strip()
    return text or UNKNOWN_PLANT


def _parse_date(val: Any) -> str:
    return normalise_date(val) or UNKNOWN_DATE


# (header label, RawRecord field, parser), in sheet order
RAW_FIELD_SCHEMA: tuple[tuple[str, str, Any], ...] = (
    (PLANT_LABEL, "plant_name", _parse_plant),
    (DATE_LABEL, "date", _parse_date),
    *((label, field, safe_float) for label, field in FIELD_LABEL_MAP.items()),
)

KNOWN_HEADERS = frozenset(label for label, _, _ in RAW_FIELD_SCHEMA)


def validate_headers(headers: list[str]) -> list[str]:
    """Check a header row against the known vocabulary.

    Returns the list of expected labels that are missing. Missing labels
    are logged as a warning, unrecognised ones at debug level.
    """
    present = set(headers)
    missing = [label for label, _, _ in RAW_FIELD_SCHEMA if label not in present]
    unknown = [h for h in headers if h and h not in KNOWN_HEADERS]

    if missing:
        logger.warning(
            "%d expected column(s) missing, reading as defaults: %s",
            len(missing), missing,
        )
    if unknown:
        logger.debug("Ignoring unrecognised column(s): %s", unknown)
    return missing


def parse_row(row: Mapping[str, Any]) -> RawRecord:
    """Convert one header-keyed row into a RawRecord."""
    values = {field: parser(row.get(label)) for label, field, parser in RAW_FIELD_SCHEMA}
    return RawRecord(**values)


def parse_csv_text(text: str) -> list[dict[str, str]]:
    """Split comma-delimited text into header-keyed rows.

    Assumptions
    -----------
    - First non-empty line is the header.
    - Quoted cells may span lines.
    - Rows with fewer than two values are skipped.
    - Short rows are padded with empty strings.

    Returns
    -------
    List of dicts mapping header label to stripped cell text.
    """
    reader = csv.reader(io.StringIO(text.strip()))
    header_row = next(reader, None)
    if header_row is None:
        return []
    headers = [h.strip() for h in header_row]
    validate_headers(headers)

    rows = []
    for values in reader:
        if len(values) < _MIN_ROW_VALUES:
            continue
        values = [v.strip() for v in values]
        rows.append({
            header: values[idx] if idx < len(values) else ""
            for idx, header in enumerate(headers)
        })

    return rows


def read_excel_rows(source: str | Path | BinaryIO) -> list[dict[str, Any]]:
    """Read the first worksheet of a workbook into header-keyed rows.

    Date-formatted cells arrive as datetime objects; everything else keeps
    the cell's native type. Fully blank rows are skipped.
    """
    wb = openpyxl.load_workbook(source, data_only=True)
    try:
        ws = wb[wb.sheetnames[0]]
        row_iter = ws.iter_rows(values_only=True)

        header_row = next(row_iter, None)
        if header_row is None:
            return []
        headers = [str(h).strip() if h is not None else "" for h in header_row]
        validate_headers(headers)

        rows = []
        for values in row_iter:
            if all(v is None or (isinstance(v, str) and not v.strip()) for v in values):
                continue
            rows.append({
                header: value
                for header, value in zip(headers, values)
                if header
            })
    finally:
        wb.close()

    return rows


def _read_rows(payload: bytes, suffix: str, name: str) -> list[dict[str, Any]]:
    if suffix in _TEXT_SUFFIXES:
        return parse_csv_text(payload.decode("utf-8-sig"))
    if suffix in _EXCEL_SUFFIXES:
        return read_excel_rows(io.BytesIO(payload))
    raise IngestionError(f"Unsupported file type '{suffix}' for {name}")


def read_plant_bytes(content: bytes, filename: str) -> list[dict[str, Any]]:
    """Read an uploaded file's raw bytes; the filename suffix picks the format.

    Raises
    ------
    IngestionError if the payload cannot be decoded as a plant sheet.
    """
    suffix = Path(filename).suffix.lower()
    try:
        rows = _read_rows(content, suffix, filename)
    # Damaged workbook XML surfaces as a SyntaxError subclass (ElementTree or lxml ParseError)
    except (zipfile.BadZipFile, InvalidFileException, SyntaxError,
            csv.Error, KeyError, TypeError, ValueError) as exc:
        logger.exception("Failed to parse plant data file: %s", filename)
        raise IngestionError(f"Could not read {filename}: {exc}") from exc

    logger.info("Loaded %d plant rows from %s", len(rows), filename)
    return rows


def read_plant_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read a CSV or Excel plant sheet from disk into header-keyed rows."""
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.exception("Failed to open plant data file: %s", path)
        raise IngestionError(f"Could not open {path}: {exc}") from exc
    return read_plant_bytes(content, path.name)


def load_plant_records(path: str | Path) -> list[RawRecord]:
    """Load a plant sheet and parse every row into a RawRecord.

    Returns
    -------
    List of RawRecord in sheet order. Empty if the sheet has no data rows.
    """
    records = [parse_row(row) for row in read_plant_rows(path)]
    logger.info("Parsed %d raw plant records from %s", len(records), path)
    return records
