"""
Plant Energy Intelligence — End-to-end analytics pipeline.

Runs the full data pipeline from a plant data sheet to dashboard-ready
outputs and prints smoke-test summaries. Falls back to simulated data
when no sheet is given and the sample file does not exist.

Usage:
    python main.py [path/to/plant_data.xlsx|.csv] [MMBTU|GJ]
"""

import logging
import sys
from pathlib import Path

import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from plant_energy.config import SAMPLE_DATA_FILE
from plant_energy.dashboard import (
    get_analysis_context,
    get_peer_comparison,
    get_plant_overview,
)
from plant_energy.dataset import DatasetStore
from plant_energy.simulator import generate_plant_rows, write_sample_workbook

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def resolve_source(path_arg: str | None = None) -> Path:
    """Pick the sheet to load.

    Only the default sample file is simulated when missing. A path given
    on the command line must exist.
    """
    if path_arg:
        source = Path(path_arg)
        if not source.exists():
            logger.error("Plant data file not found: %s", source)
            raise FileNotFoundError(f"Plant data file not found: {source}")
        return source

    if not SAMPLE_DATA_FILE.exists():
        logger.warning("%s not found, writing simulated sample data", SAMPLE_DATA_FILE)
        SAMPLE_DATA_FILE.parent.mkdir(parents=True, exist_ok=True)
        write_sample_workbook(SAMPLE_DATA_FILE, generate_plant_rows())
    return SAMPLE_DATA_FILE


def main() -> None:
    """Run the full analytics pipeline and print smoke-test outputs."""
    source = resolve_source(sys.argv[1] if len(sys.argv) > 1 else None)
    energy_unit = sys.argv[2] if len(sys.argv) > 2 else "MMBTU"

    print("=" * 70)
    print("  PLANT ENERGY INTELLIGENCE — Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    store = DatasetStore()
    dataset = store.load(source)
    print(f"\n{len(dataset)} processed records loaded from {source}")

    # ------------------------------------------------------------------
    # 2. Fact table
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] FACT TABLE")
    print("-" * 40)

    fact = dataset.to_frame()
    with pd.option_context("display.width", 140):
        print(fact[["date", "plant_name", "gas_total_internal", "total_energy_expended_mmbtu",
                    "ghg_total", "sec", "eii", "emission_intensity"]].head(10).to_string(index=False))

    # ------------------------------------------------------------------
    # 3. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    dates = dataset.available_dates()
    print(f"\nAvailable dates: {dates}")

    selection = dataset.default_selection()
    if selection is None:
        print("\nDataset is empty — nothing to show.")
        return
    selected_date, selected_plant = selection
    print(f"Plants on {selected_date}: {dataset.plants_for_date(selected_date)}")

    overview = get_plant_overview(dataset, selected_date, selected_plant, energy_unit)
    print(f"\nOverview — {selected_plant} on {selected_date} ({energy_unit}):")
    for name, card in overview["cards"].items():
        print(f"  {name:16s} | {card['value']:>14,.2f} {card['unit']}")
    for name, gauge in overview["kpis"].items():
        print(f"  {name:16s} | {gauge['value']:>14,.4f} {gauge['unit']:12s} [{gauge['rag']}]")

    benchmarks = overview["kpis"]["sec"]["benchmarks"]
    if benchmarks:
        print(f"\n  SEC best : {benchmarks['min']['plant']} ({benchmarks['min']['value']:.4f})")
        print(f"  SEC worst: {benchmarks['max']['plant']} ({benchmarks['max']['value']:.4f})")

    print("\nPeer comparison:")
    print(get_peer_comparison(dataset, selected_date).to_string(index=False))

    context = get_analysis_context(dataset, selected_date, selected_plant)
    print(f"\nAnalysis context: {context['peer_count']} peers, "
          f"SEC rank {context['plant']['sec_rank']}")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main()
