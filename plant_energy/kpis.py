"""
KPI computation functions — pure functions with no side effects.

Provides guarded ratios, RAG classification against the gauge
thresholds, and min/max and ranking across plants reporting the same day.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from .config import KPI_REGISTRY
from .records import ProcessedRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KpiStats:
    """Best (min) and worst (max) records for one KPI on one day."""

    kpi_name: str
    min: ProcessedRecord
    max: ProcessedRecord


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    """Return numerator / denominator * scale, or 0.0 if denominator <= 0.

    Gauges expect a bounded number, so a missing denominator reads as 0
    rather than infinity.
    """
    if denominator > 0:
        return (numerator / denominator) * scale
    return 0.0


def _kpi_value(record: ProcessedRecord, kpi_name: str) -> float:
    if kpi_name not in KPI_REGISTRY:
        raise KeyError(f"Unknown KPI '{kpi_name}'")
    return getattr(record, kpi_name)


def classify_kpi(value: float, kpi_name: str) -> str:
    """Return 'green', 'amber', 'red' or 'grey' for a KPI value.

    Logic
    -----
    All plant KPIs are lower-is-better:
        grey   if value <= 0 (no data)
        green  if value <  amber_from
        amber  if value <  red_from
        red    otherwise
    """
    registry = KPI_REGISTRY[kpi_name]

    if value <= 0:
        return "grey"
    if value < registry["amber_from"]:
        return "green"
    if value < registry["red_from"]:
        return "amber"
    return "red"


def kpi_min_max(records: Iterable[ProcessedRecord], kpi_name: str = "sec") -> KpiStats | None:
    """Return min and max records by `kpi_name`, ignoring values <= 0.

    Ties keep the earliest record. Returns None when no record has a
    positive value.
    """
    valid = [r for r in records if _kpi_value(r, kpi_name) > 0]
    if not valid:
        logger.debug("No positive '%s' values to compare", kpi_name)
        return None

    lowest = highest = valid[0]
    for record in valid[1:]:
        value = _kpi_value(record, kpi_name)
        if value < _kpi_value(lowest, kpi_name):
            lowest = record
        if value > _kpi_value(highest, kpi_name):
            highest = record

    return KpiStats(kpi_name=kpi_name, min=lowest, max=highest)


def rank_plants(records: Iterable[ProcessedRecord], kpi_name: str = "sec") -> list[dict]:
    """Rank plants by a KPI, lowest (best) first.

    Records with no positive value are left out of the ranking.

    Returns
    -------
    List of dicts: {"rank": 1, "plant_name": ..., "value": ...}
    """
    valid = [r for r in records if _kpi_value(r, kpi_name) > 0]
    ordered = sorted(valid, key=lambda r: _kpi_value(r, kpi_name))
    return [
        {"rank": idx, "plant_name": r.plant_name, "value": _kpi_value(r, kpi_name)}
        for idx, r in enumerate(ordered, start=1)
    ]
