"""
Dashboard-ready output functions.

These are the primary entry points for a Streamlit/Dash front end.
Each function takes the active PlantDataset explicitly and returns plain
dicts or DataFrames suitable for rendering cards, gauges and tables.
"""

import logging

import pandas as pd

from .config import CANONICAL_ENERGY_UNIT, KPI_REGISTRY
from .dataset import PlantDataset
from .kpis import classify_kpi, rank_plants
from .units import energy_fields_in_unit

logger = logging.getLogger(__name__)


def _kpi_gauge(value: float, kpi_name: str) -> dict:
    registry = KPI_REGISTRY[kpi_name]
    return {
        "label": registry["label"],
        "value": value,
        "unit": registry["unit"],
        "gauge_max": registry["gauge_max"],
        "thresholds": {"amber_from": registry["amber_from"], "red_from": registry["red_from"]},
        "rag": classify_kpi(value, kpi_name),
    }


def get_plant_overview(
    dataset: PlantDataset,
    selected_date: str,
    selected_plant: str,
    energy_unit: str = CANONICAL_ENERGY_UNIT,
) -> dict:
    """Single entry point a Streamlit app would call to populate cards and gauges.

    Parameters
    ----------
    dataset : Active PlantDataset.
    selected_date : Canonical date string (e.g. "01-Oct-25").
    selected_plant : Plant name.
    energy_unit : "MMBTU" or "GJ"; applies to the energy cards only.

    Returns
    -------
    Dict with structure:
    {
        "plant": "A", "date": "01-Oct-25", "is_placeholder": False,
        "energy_unit": "MMBTU",
        "cards": {"gas_flared": ..., "gas_internal": {...}, ...},
        "kpis": {"sec": {"value": ..., "rag": ..., "benchmarks": {...}}, ...},
    }
    """
    record = dataset.get_record(selected_date, selected_plant)
    if record.is_placeholder:
        logger.debug("No record for '%s' on %s, showing placeholder", selected_plant, selected_date)

    energy = energy_fields_in_unit(record, energy_unit)

    cards = {
        "gas_flared": {"value": record.gas_flared, "unit": "SCM"},
        "gas_internal": {
            "value": record.gas_total_internal,
            "unit": "SCM",
            "breakdown": {
                "Boiler": record.gas_boiler,
                "Furnace": record.gas_furnace,
                "GDU": record.gas_gdu,
                "Engine": record.gas_engine,
                "Package Gas Compressor": record.gas_compressor,
            },
        },
        "elec_consumed": {
            "value": record.elec_total_consumed,
            "unit": "kWh",
            "breakdown": {
                "GCS": record.elec_gcs,
                "ETP": record.elec_etp,
                "Refinery": record.elec_refinery,
            },
        },
        "water": {
            "value": record.water_total,
            "unit": "m³",
            "breakdown": {"GCS": record.water_gcs, "Refinery": record.water_refinery},
        },
        "elec_generated": {"value": record.elec_generated, "unit": "kWh"},
        "hsd_consumed": {
            "value": record.hsd_total_consumed,
            "unit": "KL",
            "breakdown": {"Pumps": record.hsd_pumps, "Emergency Diesel Gensets": record.hsd_gensets},
        },
        "hsd_issued": {
            "value": record.hsd_total_issued,
            "unit": "KL",
            "breakdown": {
                "Fire Section": record.hsd_issued_fire,
                "PSA": record.hsd_issued_psa,
                "Others": record.hsd_issued_others,
            },
        },
        "energy_expended": {
            "value": energy["total_energy_expended_mmbtu"],
            "unit": energy_unit,
            "breakdown": {
                "From Gas": energy["energy_from_gas_mmbtu"],
                "From HSD": energy["energy_from_hsd_mmbtu"],
            },
        },
        "energy_produced": {
            "value": energy["total_energy_produced_mmbtu"],
            "unit": energy_unit,
            "breakdown": {
                "From Gas": energy["energy_from_gas_prod_mmbtu"],
                "From Oil": energy["energy_from_oil_prod_mmbtu"],
            },
        },
        "ghg": {
            "value": record.ghg_total,
            "unit": "tCO2e",
            "breakdown": {"Scope 1": record.ghg_scope1, "Scope 2": record.ghg_scope2},
        },
    }

    kpis = {name: _kpi_gauge(getattr(record, name), name) for name in KPI_REGISTRY}

    sec_stats = dataset.kpi_min_max(selected_date, "sec")
    kpis["sec"]["benchmarks"] = None
    if sec_stats is not None:
        kpis["sec"]["benchmarks"] = {
            "min": {"plant": sec_stats.min.plant_name, "value": sec_stats.min.sec},
            "max": {"plant": sec_stats.max.plant_name, "value": sec_stats.max.sec},
        }

    return {
        "plant": record.plant_name,
        "date": record.date,
        "is_placeholder": record.is_placeholder,
        "energy_unit": energy_unit,
        "cards": cards,
        "kpis": kpis,
    }


def get_peer_comparison(dataset: PlantDataset, selected_date: str) -> pd.DataFrame:
    """One row per plant on `selected_date` with KPIs, RAG and SEC rank.

    Returns
    -------
    DataFrame with columns:
        plant_name, sec, eii, emission_intensity, ghg_total, gas_flared,
        sec_rag, eii_rag, sec_rank
    """
    columns = [
        "plant_name", "sec", "eii", "emission_intensity", "ghg_total", "gas_flared",
        "sec_rag", "eii_rag", "sec_rank",
    ]
    peers = dataset.peers_for_date(selected_date)
    if not peers:
        logger.warning("No data for date '%s'", selected_date)
        return pd.DataFrame(columns=columns)

    ranks = {row["plant_name"]: row["rank"] for row in rank_plants(peers, "sec")}

    rows = []
    for r in peers:
        rows.append({
            "plant_name": r.plant_name,
            "sec": r.sec,
            "eii": r.eii,
            "emission_intensity": r.emission_intensity,
            "ghg_total": r.ghg_total,
            "gas_flared": r.gas_flared,
            "sec_rag": classify_kpi(r.sec, "sec"),
            "eii_rag": classify_kpi(r.eii, "eii"),
            "sec_rank": ranks.get(r.plant_name),
        })

    return pd.DataFrame(rows, columns=columns)


def get_analysis_context(
    dataset: PlantDataset,
    selected_date: str,
    selected_plant: str,
) -> dict | None:
    """Payload handed to the external commentary service.

    Contains the selected plant's summary and every plant reporting on the
    same date (the plant itself included, so it can be ranked). Returns
    None when the selection has no record.
    """
    record = dataset.get_record(selected_date, selected_plant)
    if record.is_placeholder:
        return None

    peers = dataset.peers_for_date(selected_date)
    sec_ranking = rank_plants(peers, "sec")
    eii_ranking = rank_plants(peers, "eii")

    def _rank_of(ranking: list[dict]) -> int | None:
        return next((row["rank"] for row in ranking if row["plant_name"] == record.plant_name), None)

    return {
        "plant": {
            "plant_name": record.plant_name,
            "date": record.date,
            "sec": record.sec,
            "eii": record.eii,
            "emission_intensity": record.emission_intensity,
            "gas_flared": record.gas_flared,
            "ghg_total": record.ghg_total,
            "total_energy_expended_mmbtu": record.total_energy_expended_mmbtu,
            "sec_rank": _rank_of(sec_ranking),
            "eii_rank": _rank_of(eii_ranking),
        },
        "peer_count": len(peers),
        "peers": [
            {
                "plant_name": p.plant_name,
                "sec": p.sec,
                "eii": p.eii,
                "ghg_total": p.ghg_total,
                "gas_flared": p.gas_flared,
            }
            for p in peers
        ],
    }
