import io
import zipfile
from datetime import datetime

import openpyxl
import pytest

from plant_energy.loaders import (
    IngestionError,
    load_plant_records,
    parse_csv_text,
    parse_row,
    read_plant_bytes,
    read_plant_rows,
)
from plant_energy.loaders.plant_records import RAW_FIELD_SCHEMA, validate_headers


def test_schema_covers_every_raw_field():
    from dataclasses import fields

    from plant_energy.records import RawRecord

    schema_fields = [field for _, field, _ in RAW_FIELD_SCHEMA]
    assert schema_fields == [f.name for f in fields(RawRecord)]


def test_parse_row_reads_known_headers(example_row):
    raw = parse_row(example_row)
    assert raw.plant_name == "A"
    assert raw.date == "01-Oct-25"
    assert raw.gas_boiler == 100.0
    assert raw.hsd_pumps == 10.0
    assert raw.elec_imported == 500.0
    assert raw.expected_energy_mmbtu == 50.0


def test_parse_row_defaults_missing_and_bad_cells():
    raw = parse_row({
        "Gas Consumption - Boiler (SCM)": "",
        "Gas Flared (SCM)": "not measured",
        "HSD Issued - PSA (KL)": None,
    })
    assert raw.plant_name == "Unknown Plant"
    assert raw.date == "Unknown Date"
    assert raw.gas_boiler == 0.0
    assert raw.gas_flared == 0.0
    assert raw.hsd_issued_psa == 0.0
    assert raw.oil_produced == 0.0


def test_parse_row_normalises_serial_date():
    raw = parse_row({"Plant Name": " B ", "Date": 45901})
    assert raw.plant_name == "B"
    assert raw.date == "01-Sep-25"


def test_header_matching_is_exact():
    raw = parse_row({"gas consumption - boiler (scm)": 5})
    assert raw.gas_boiler == 0.0


def test_validate_headers_reports_missing():
    missing = validate_headers(["Plant Name", "Date", "Something Else"])
    assert "Gas Flared (SCM)" in missing
    assert "Plant Name" not in missing


def test_parse_csv_text_skips_short_rows():
    text = (
        "Plant Name,Date,Gas Consumption - Boiler (SCM),Gas Flared (SCM)\n"
        "A,01-Oct-25,100,5\n"
        "\n"
        "lonely\n"
        "B,01-Oct-25,abc\n"
    )
    rows = parse_csv_text(text)
    assert len(rows) == 2
    assert rows[0]["Gas Consumption - Boiler (SCM)"] == "100"
    assert rows[1]["Gas Flared (SCM)"] == ""
    assert parse_row(rows[1]).gas_boiler == 0.0


def test_parse_csv_text_keeps_quoted_line_breaks():
    text = (
        "Plant Name,Date,Gas Flared (SCM)\n"
        "\"Plant\nA\",01-Oct-25,5\n"
        "B,01-Oct-25,6\n"
    )
    rows = parse_csv_text(text)
    assert len(rows) == 2
    assert rows[0]["Plant Name"] == "Plant\nA"
    assert rows[0]["Gas Flared (SCM)"] == "5"
    assert rows[1]["Plant Name"] == "B"


def test_parse_csv_text_header_only_is_empty():
    assert parse_csv_text("Plant Name,Date\n") == []
    assert parse_csv_text("") == []


def test_read_csv_file(tmp_path):
    path = tmp_path / "plants.csv"
    path.write_text(
        "Plant Name,Date,Gas Production (SCM)\n"
        "A,01-Oct-25,200\n"
        "B,2025-10-01,300\n",
        encoding="utf-8",
    )
    records = load_plant_records(path)
    assert [r.plant_name for r in records] == ["A", "B"]
    assert [r.date for r in records] == ["01-Oct-25", "01-Oct-25"]
    assert records[1].gas_produced == 300.0


def test_read_excel_file(tmp_path):
    path = tmp_path / "plants.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Plant Name", "Date", "Gas Consumption - Boiler (SCM)", "Notes"])
    ws.append(["A", datetime(2025, 10, 1), 120, "ok"])
    ws.append([None, None, None, None])
    ws.append(["B", 45901, "15", None])
    wb.save(path)

    rows = read_plant_rows(path)
    assert len(rows) == 2

    records = load_plant_records(path)
    assert records[0].date == "01-Oct-25"
    assert records[0].gas_boiler == 120.0
    assert records[1].date == "01-Sep-25"
    assert records[1].gas_boiler == 15.0


def test_unsupported_suffix_raises():
    with pytest.raises(IngestionError):
        read_plant_bytes(b"whatever", "plants.pdf")


def test_corrupt_workbook_raises():
    with pytest.raises(IngestionError):
        read_plant_bytes(b"this is not a zip archive", "plants.xlsx")


def test_missing_file_raises(tmp_path):
    with pytest.raises(IngestionError):
        read_plant_rows(tmp_path / "absent.csv")


def test_truncated_workbook_xml_raises():
    buffer = io.BytesIO()
    openpyxl.Workbook().save(buffer)

    damaged = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(buffer.getvalue())) as src, \
            zipfile.ZipFile(damaged, "w") as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == "xl/workbook.xml":
                data = data[: len(data) // 2]
            dst.writestr(item, data)

    with pytest.raises(IngestionError):
        read_plant_bytes(damaged.getvalue(), "plants.xlsx")
