"""
Configuration: conversion factors, emission factors, input header
vocabulary and KPI registry.

FIELD_LABEL_MAP maps each column header of the daily plant sheet to its
RawRecord field name. KPI_REGISTRY maps each KPI to its display unit,
gauge range and RAG thresholds.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# File paths — adjust these if source files move
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

SAMPLE_DATA_FILE = DATA_DIR / "plant_daily_data.xlsx"

# ---------------------------------------------------------------------------
# Unit conversions (approximate industry values)
# ---------------------------------------------------------------------------
CONVERSIONS: dict[str, float] = {
    "SCM_TO_MMBTU": 0.0396,  # net CV of natural gas
    "KWH_TO_MMBTU": 0.003412,
    "KL_TO_MMBTU_HSD": 35.8,  # high speed diesel
    "BARREL_TO_MMBTU_OIL": 5.8,  # crude oil
    "MMBTU_TO_GJ": 1.05506,
}

ENERGY_UNITS = ("MMBTU", "GJ")
CANONICAL_ENERGY_UNIT = "MMBTU"

# ---------------------------------------------------------------------------
# Emission factors
# ---------------------------------------------------------------------------
EMISSION_FACTORS: dict[str, float] = {
    "GAS_KGCO2_PER_SCM": 1.88,  # natural gas combustion
    "HSD_KGCO2_PER_KL": 2650.0,  # diesel combustion
    "GRID_ELEC_KGCO2_PER_KWH": 0.82,  # grid average, high side
}

KG_PER_TONNE = 1000.0

# ---------------------------------------------------------------------------
# Input sheet vocabulary
# ---------------------------------------------------------------------------
PLANT_LABEL = "Plant Name"
DATE_LABEL = "Date"

UNKNOWN_PLANT = "Unknown Plant"
UNKNOWN_DATE = "Unknown Date"

# Placeholder identity for an empty (date, plant) selection
PLACEHOLDER_PLANT = "Select Plant"
PLACEHOLDER_DATE = "Select Date"

# Column header -> RawRecord field, in sheet order
FIELD_LABEL_MAP: dict[str, str] = {
    "Gas Consumption - Boiler (SCM)": "gas_boiler",
    "Gas Consumption - Furnace (SCM)": "gas_furnace",
    "Gas Consumption - GDU (SCM)": "gas_gdu",
    "Gas Consumption - Engine (SCM)": "gas_engine",
    "Gas Consumption - Package Gas Compressor (SCM)": "gas_compressor",
    "Gas Flared (SCM)": "gas_flared",
    "Electrical Consumption - GCS (kWh)": "elec_gcs",
    "Electrical Consumption - ETP (kWh)": "elec_etp",
    "Electrical Consumption - Refinery (kWh)": "elec_refinery",
    "Electrical Generated (kWh)": "elec_generated",
    "APSEB Electricity Imported (kWh)": "elec_imported",
    "Water Consumption - GCS (m³)": "water_gcs",
    "Water Consumption - Refinery (m³)": "water_refinery",
    "HSD Consumption - Pumps (KL)": "hsd_pumps",
    "HSD Consumption - Emergency Diesel Gensets (KL)": "hsd_gensets",
    "HSD Issued - Fire Section (KL)": "hsd_issued_fire",
    "HSD Issued - PSA (KL)": "hsd_issued_psa",
    "HSD Issued - Others (KL)": "hsd_issued_others",
    "Gas Production (SCM)": "gas_produced",
    "Oil Production (Barrels)": "oil_produced",
    "Expected Energy Consumption (MMBTU)": "expected_energy_mmbtu",
}

# ---------------------------------------------------------------------------
# KPI Registry
# ---------------------------------------------------------------------------
# direction: all plant KPIs are "lower_is_better"
# gauge_max: upper end of the dashboard gauge
# amber_from / red_from: lower bounds of the amber and red zones
KPI_REGISTRY: dict[str, dict] = {
    "sec": {
        "label": "Specific Energy Consumption",
        "direction": "lower_is_better",
        "unit": "MMBTU/MMBTU",
        "gauge_max": 0.5,
        "amber_from": 0.15,
        "red_from": 0.30,
    },
    "eii": {
        "label": "Energy Intensity Index",
        "direction": "lower_is_better",
        "unit": "%",
        "gauge_max": 150.0,
        "amber_from": 100.0,
        "red_from": 120.0,
    },
    "emission_intensity": {
        "label": "Emission Intensity",
        "direction": "lower_is_better",
        "unit": "tCO2e/SCM",
        "gauge_max": 0.1,
        "amber_from": 0.02,
        "red_from": 0.05,
    },
}

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EXCEL_UNIX_EPOCH_OFFSET = 25569  # serial day number of 1970-01-01
EXCEL_SERIAL_THRESHOLD = 30000  # smaller serials are not treated as dates
MS_PER_DAY = 86400 * 1000
MIDDAY_SHIFT_HOURS = 12

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
