"""
Data transforms: turn raw plant rows into processed energy and emissions
records, and flatten them into a daily fact table.
"""

import logging
from typing import Iterable

import pandas as pd

from .config import CONVERSIONS, EMISSION_FACTORS, KG_PER_TONNE
from .kpis import safe_ratio
from .records import PROCESSED_FIELDS, ProcessedRecord, RawRecord

logger = logging.getLogger(__name__)


def process_record(raw: RawRecord) -> ProcessedRecord:
    """Compute totals, energy, emissions and KPIs for one plant-day.

    Pure and total: every input field is already a finite float, and each
    ratio returns 0 when its denominator is not positive.

    Formulas
    --------
    - Energy expended = gas internal * SCM_TO_MMBTU + HSD consumed * KL_TO_MMBTU_HSD
    - Energy produced = gas produced * SCM_TO_MMBTU + oil produced * BARREL_TO_MMBTU_OIL
    - Scope 1 (t) = (gas internal * gas EF + HSD consumed * HSD EF) / 1000
    - Scope 2 (t) = electricity imported * grid EF / 1000
    - SEC = gas energy / energy produced
    - EII = energy expended / expected energy * 100
    - Emission intensity = total GHG / gas produced
    """
    # Gas internal fuel consumption
    gas_total_internal = (
        raw.gas_boiler + raw.gas_furnace + raw.gas_gdu
        + raw.gas_engine + raw.gas_compressor
    )

    elec_total_consumed = raw.elec_gcs + raw.elec_etp + raw.elec_refinery
    water_total = raw.water_gcs + raw.water_refinery
    hsd_total_consumed = raw.hsd_pumps + raw.hsd_gensets
    hsd_total_issued = raw.hsd_issued_fire + raw.hsd_issued_psa + raw.hsd_issued_others

    # Energy expended
    energy_from_gas = gas_total_internal * CONVERSIONS["SCM_TO_MMBTU"]
    energy_from_hsd = hsd_total_consumed * CONVERSIONS["KL_TO_MMBTU_HSD"]
    total_energy_expended = energy_from_gas + energy_from_hsd

    # Energy produced
    energy_from_gas_prod = raw.gas_produced * CONVERSIONS["SCM_TO_MMBTU"]
    energy_from_oil_prod = raw.oil_produced * CONVERSIONS["BARREL_TO_MMBTU_OIL"]
    total_energy_produced = energy_from_gas_prod + energy_from_oil_prod

    # GHG: scope 1 is gas + HSD combustion, scope 2 is imported grid power
    scope1 = (
        gas_total_internal * EMISSION_FACTORS["GAS_KGCO2_PER_SCM"]
        + hsd_total_consumed * EMISSION_FACTORS["HSD_KGCO2_PER_KL"]
    ) / KG_PER_TONNE
    scope2 = (raw.elec_imported * EMISSION_FACTORS["GRID_ELEC_KGCO2_PER_KWH"]) / KG_PER_TONNE
    ghg_total = scope1 + scope2

    # SEC uses gas energy only, not gas + HSD
    sec = safe_ratio(energy_from_gas, total_energy_produced)
    eii = safe_ratio(total_energy_expended, raw.expected_energy_mmbtu, scale=100.0)
    emission_intensity = safe_ratio(ghg_total, raw.gas_produced)

    return ProcessedRecord(
        plant_name=raw.plant_name,
        date=raw.date,
        gas_flared=raw.gas_flared,
        gas_boiler=raw.gas_boiler,
        gas_furnace=raw.gas_furnace,
        gas_gdu=raw.gas_gdu,
        gas_engine=raw.gas_engine,
        gas_compressor=raw.gas_compressor,
        gas_total_internal=gas_total_internal,
        elec_gcs=raw.elec_gcs,
        elec_etp=raw.elec_etp,
        elec_refinery=raw.elec_refinery,
        elec_total_consumed=elec_total_consumed,
        water_gcs=raw.water_gcs,
        water_refinery=raw.water_refinery,
        water_total=water_total,
        elec_generated=raw.elec_generated,
        hsd_pumps=raw.hsd_pumps,
        hsd_gensets=raw.hsd_gensets,
        hsd_total_consumed=hsd_total_consumed,
        hsd_issued_fire=raw.hsd_issued_fire,
        hsd_issued_psa=raw.hsd_issued_psa,
        hsd_issued_others=raw.hsd_issued_others,
        hsd_total_issued=hsd_total_issued,
        energy_from_gas_mmbtu=energy_from_gas,
        energy_from_hsd_mmbtu=energy_from_hsd,
        total_energy_expended_mmbtu=total_energy_expended,
        gas_produced=raw.gas_produced,
        oil_produced=raw.oil_produced,
        energy_from_gas_prod_mmbtu=energy_from_gas_prod,
        energy_from_oil_prod_mmbtu=energy_from_oil_prod,
        total_energy_produced_mmbtu=total_energy_produced,
        elec_imported=raw.elec_imported,
        ghg_scope1=scope1,
        ghg_scope2=scope2,
        ghg_total=ghg_total,
        expected_energy_mmbtu=raw.expected_energy_mmbtu,
        sec=sec,
        eii=eii,
        emission_intensity=emission_intensity,
    )


def process_records(raws: Iterable[RawRecord]) -> list[ProcessedRecord]:
    """Process a batch of raw records, preserving order."""
    processed = [process_record(raw) for raw in raws]
    logger.info("Processed %d plant records", len(processed))
    return processed


def build_fact_daily_energy(records: Iterable[ProcessedRecord]) -> pd.DataFrame:
    """Flatten processed records into a daily fact table.

    Returns
    -------
    fact_daily_energy DataFrame with one row per (plant, date) and one
    column per ProcessedRecord field. Empty input returns an empty
    DataFrame with the full schema.
    """
    rows = [r.to_dict() for r in records]
    if not rows:
        logger.warning("No processed records. Returning empty fact_daily_energy with schema.")
        return pd.DataFrame(columns=list(PROCESSED_FIELDS))

    df = pd.DataFrame(rows, columns=list(PROCESSED_FIELDS))
    logger.info("Built fact_daily_energy with %d rows", len(df))
    return df
