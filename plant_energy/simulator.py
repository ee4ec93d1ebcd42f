"""
Simulated data generator for the plant energy dashboard.

Generates realistic daily plant sheets based on typical onshore
gas-collecting-station parameters. All values are synthetic — no real
operational data is used.
"""

import logging
from pathlib import Path

import numpy as np
import openpyxl
import pandas as pd

from .config import CONVERSIONS, DATE_LABEL, FIELD_LABEL_MAP, PLANT_LABEL

logger = logging.getLogger(__name__)

_DEFAULT_PLANTS = ("GCS Alpha", "GCS Bravo", "GCS Charlie", "Refinery Delta")

# ---------------------------------------------------------------------------
# Typical daily parameters: field -> (mean, std)
# ---------------------------------------------------------------------------
_DAILY_PARAMS = {
    "gas_boiler": (4_200, 400),
    "gas_furnace": (2_600, 300),
    "gas_gdu": (1_100, 150),
    "gas_engine": (1_800, 200),
    "gas_compressor": (3_500, 350),
    "gas_flared": (900, 250),
    "elec_gcs": (18_000, 1_500),
    "elec_etp": (2_400, 300),
    "elec_refinery": (9_500, 900),
    "elec_generated": (12_000, 1_200),
    "elec_imported": (16_000, 2_000),
    "water_gcs": (140, 20),
    "water_refinery": (260, 30),
    "hsd_pumps": (1.2, 0.3),
    "hsd_gensets": (0.4, 0.2),
    "hsd_issued_fire": (0.3, 0.1),
    "hsd_issued_psa": (0.5, 0.15),
    "hsd_issued_others": (0.2, 0.1),
    "gas_produced": (210_000, 25_000),
    "oil_produced": (850, 120),
}

_FIELD_TO_LABEL = {field: label for label, field in FIELD_LABEL_MAP.items()}


def generate_plant_rows(
    plants: tuple[str, ...] = _DEFAULT_PLANTS,
    start_date: str = "2025-10-01",
    n_days: int = 7,
    seed: int = 42,
) -> list[dict]:
    """Generate header-keyed rows, one per plant per day.

    Dates are pd.Timestamp objects so the rows exercise the same date
    normalisation as Excel date cells. Expected energy is set at 90-115%
    of the simulated actual, giving EII values around 100%.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start_date, periods=n_days, freq="D")
    rows = []

    for day in dates:
        for plant in plants:
            values = {
                field: float(round(max(rng.normal(mean, std), 0.0), 2))
                for field, (mean, std) in _DAILY_PARAMS.items()
            }

            gas_internal = sum(values[f] for f in (
                "gas_boiler", "gas_furnace", "gas_gdu", "gas_engine", "gas_compressor",
            ))
            hsd_consumed = values["hsd_pumps"] + values["hsd_gensets"]
            actual_energy = (
                gas_internal * CONVERSIONS["SCM_TO_MMBTU"]
                + hsd_consumed * CONVERSIONS["KL_TO_MMBTU_HSD"]
            )
            values["expected_energy_mmbtu"] = float(round(actual_energy * rng.uniform(0.9, 1.15), 2))

            row = {PLANT_LABEL: plant, DATE_LABEL: day}
            row.update({_FIELD_TO_LABEL[field]: value for field, value in values.items()})
            rows.append(row)

    logger.info("Generated %d simulated plant rows", len(rows))
    return rows


def write_sample_workbook(path: str | Path, rows: list[dict]) -> Path:
    """Write header-keyed rows to a single-sheet workbook in sheet column order."""
    path = Path(path)
    headers = [PLANT_LABEL, DATE_LABEL, *FIELD_LABEL_MAP.keys()]

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Daily Data"
    ws.append(headers)
    for row in rows:
        ws.append([
            row.get(h).to_pydatetime() if isinstance(row.get(h), pd.Timestamp) else row.get(h)
            for h in headers
        ])
    wb.save(path)

    logger.info("Wrote %d rows to %s", len(rows), path)
    return path
