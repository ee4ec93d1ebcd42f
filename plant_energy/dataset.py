"""
Dataset snapshots and derived views.

A PlantDataset is an immutable batch of processed records from one
upload. DatasetStore owns the active snapshot and swaps it atomically
when a new file is ingested.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import pandas as pd

from .kpis import KpiStats, kpi_min_max
from .loaders import load_plant_records, parse_row, read_plant_bytes
from .loaders.utils import date_sort_key
from .records import BLANK_RECORD, ProcessedRecord, RawRecord
from .transforms import build_fact_daily_energy, process_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlantDataset:
    """Processed records from one upload, plus read-only derived views."""

    records: tuple[ProcessedRecord, ...] = ()
    source: str | None = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ProcessedRecord]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def available_dates(self) -> list[str]:
        """Unique dates in chronological order; unparseable dates sort first."""
        unique = list(dict.fromkeys(r.date for r in self.records))
        return sorted(unique, key=date_sort_key)

    def peers_for_date(self, date: str) -> list[ProcessedRecord]:
        """All records on `date`, in dataset order."""
        return [r for r in self.records if r.date == date]

    def plants_for_date(self, date: str) -> list[str]:
        return [r.plant_name for r in self.peers_for_date(date)]

    def get_record(self, date: str, plant_name: str) -> ProcessedRecord:
        """Exact (date, plant) lookup; BLANK_RECORD when there is no match."""
        for record in self.records:
            if record.date == date and record.plant_name == plant_name:
                return record
        return BLANK_RECORD

    def kpi_min_max(self, date: str, kpi_name: str = "sec") -> KpiStats | None:
        """Best and worst plant for a KPI on `date`, or None if no plant has data."""
        return kpi_min_max(self.peers_for_date(date), kpi_name)

    def default_selection(self) -> tuple[str, str] | None:
        """Earliest date and the first plant reporting on it."""
        dates = self.available_dates()
        if not dates:
            return None
        first_date = dates[0]
        return first_date, self.plants_for_date(first_date)[0]

    def to_frame(self) -> pd.DataFrame:
        return build_fact_daily_energy(self.records)


EMPTY_DATASET = PlantDataset()


def build_dataset(raws: Iterable[RawRecord], source: str | None = None) -> PlantDataset:
    """Process raw records into a dataset with one record per (plant, date).

    A repeated (plant, date) pair keeps its first occurrence; later
    duplicates are dropped with a warning.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[ProcessedRecord] = []

    for record in process_records(raws):
        key = (record.plant_name, record.date)
        if key in seen:
            logger.warning(
                "Duplicate record for plant '%s' on %s, keeping the first",
                record.plant_name, record.date,
            )
            continue
        seen.add(key)
        unique.append(record)

    dataset = PlantDataset(records=tuple(unique), source=source)
    logger.info(
        "Built dataset with %d records across %d dates",
        len(dataset), len(dataset.available_dates()),
    )
    return dataset


def load_dataset(path: str | Path) -> PlantDataset:
    """Read, parse and process a plant sheet into a complete dataset."""
    return build_dataset(load_plant_records(path), source=str(path))


def load_dataset_bytes(content: bytes, filename: str) -> PlantDataset:
    """Same as load_dataset, for an uploaded file held in memory."""
    raws = [parse_row(row) for row in read_plant_bytes(content, filename)]
    return build_dataset(raws, source=filename)


class DatasetStore:
    """Holder of the active dataset.

    Readers get a complete snapshot; a new upload is fully built before it
    replaces the old one, so a failed ingestion leaves the previous
    dataset active.
    """

    def __init__(self, dataset: PlantDataset = EMPTY_DATASET):
        self._lock = threading.Lock()
        self._dataset = dataset

    @property
    def current(self) -> PlantDataset:
        with self._lock:
            return self._dataset

    def replace(self, dataset: PlantDataset) -> PlantDataset:
        """Swap in `dataset` and return the one it replaced."""
        with self._lock:
            previous, self._dataset = self._dataset, dataset
        logger.info(
            "Active dataset replaced (%d -> %d records, source=%s)",
            len(previous), len(dataset), dataset.source,
        )
        return previous

    def load(self, path: str | Path) -> PlantDataset:
        dataset = load_dataset(path)
        self.replace(dataset)
        return dataset

    def load_bytes(self, content: bytes, filename: str) -> PlantDataset:
        dataset = load_dataset_bytes(content, filename)
        self.replace(dataset)
        return dataset

    async def aload(self, path: str | Path) -> PlantDataset:
        """Ingest `path` in a worker thread, then swap it in."""
        dataset = await asyncio.to_thread(load_dataset, path)
        self.replace(dataset)
        return dataset
