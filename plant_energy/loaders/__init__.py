"""Data ingestion loaders for daily plant operating sheets."""

from .plant_records import IngestionError, load_plant_records, parse_row
from .plant_records import parse_csv_text, read_excel_rows
from .plant_records import read_plant_bytes, read_plant_rows
from .utils import date_sort_key, normalise_date, safe_float

__all__ = [
    "IngestionError",
    "load_plant_records",
    "parse_row",
    "parse_csv_text",
    "read_excel_rows",
    "read_plant_bytes",
    "read_plant_rows",
    "date_sort_key",
    "normalise_date",
    "safe_float",
]
