"""
Record types flowing through the pipeline.

RawRecord holds one sanitised input row; ProcessedRecord holds one
(plant, date) observation with totals, energy, emissions and KPIs.
Both are frozen so a dataset can be handed to concurrent readers as-is.
"""

from dataclasses import asdict, dataclass, fields

from .config import PLACEHOLDER_DATE, PLACEHOLDER_PLANT


@dataclass(frozen=True)
class RawRecord:
    """One daily plant row with every numeric field coerced to a finite float."""

    plant_name: str
    date: str

    gas_boiler: float = 0.0
    gas_furnace: float = 0.0
    gas_gdu: float = 0.0
    gas_engine: float = 0.0
    gas_compressor: float = 0.0
    gas_flared: float = 0.0

    elec_gcs: float = 0.0
    elec_etp: float = 0.0
    elec_refinery: float = 0.0
    elec_generated: float = 0.0
    elec_imported: float = 0.0

    water_gcs: float = 0.0
    water_refinery: float = 0.0

    hsd_pumps: float = 0.0
    hsd_gensets: float = 0.0
    hsd_issued_fire: float = 0.0
    hsd_issued_psa: float = 0.0
    hsd_issued_others: float = 0.0

    gas_produced: float = 0.0
    oil_produced: float = 0.0
    expected_energy_mmbtu: float = 0.0


@dataclass(frozen=True)
class ProcessedRecord:
    """Energy and emissions metrics for one plant on one day.

    Energy fields are stored in MMBTU; emissions in tonnes CO2e.
    """

    plant_name: str
    date: str

    # Gas flared
    gas_flared: float = 0.0

    # Gas internal consumption
    gas_boiler: float = 0.0
    gas_furnace: float = 0.0
    gas_gdu: float = 0.0
    gas_engine: float = 0.0
    gas_compressor: float = 0.0
    gas_total_internal: float = 0.0

    # Electrical consumption
    elec_gcs: float = 0.0
    elec_etp: float = 0.0
    elec_refinery: float = 0.0
    elec_total_consumed: float = 0.0

    # Water consumption
    water_gcs: float = 0.0
    water_refinery: float = 0.0
    water_total: float = 0.0

    elec_generated: float = 0.0

    # HSD consumption
    hsd_pumps: float = 0.0
    hsd_gensets: float = 0.0
    hsd_total_consumed: float = 0.0

    # HSD issued
    hsd_issued_fire: float = 0.0
    hsd_issued_psa: float = 0.0
    hsd_issued_others: float = 0.0
    hsd_total_issued: float = 0.0

    # Energy expended
    energy_from_gas_mmbtu: float = 0.0
    energy_from_hsd_mmbtu: float = 0.0
    total_energy_expended_mmbtu: float = 0.0

    # Energy produced
    gas_produced: float = 0.0
    oil_produced: float = 0.0
    energy_from_gas_prod_mmbtu: float = 0.0
    energy_from_oil_prod_mmbtu: float = 0.0
    total_energy_produced_mmbtu: float = 0.0

    # GHG emissions
    elec_imported: float = 0.0
    ghg_scope1: float = 0.0
    ghg_scope2: float = 0.0
    ghg_total: float = 0.0

    # KPIs
    expected_energy_mmbtu: float = 0.0
    sec: float = 0.0
    eii: float = 0.0
    emission_intensity: float = 0.0

    @property
    def is_placeholder(self) -> bool:
        return self.plant_name == PLACEHOLDER_PLANT and self.date == PLACEHOLDER_DATE

    def to_dict(self) -> dict:
        return asdict(self)


PROCESSED_FIELDS = tuple(f.name for f in fields(ProcessedRecord))

# Derived energy values that follow the MMBTU/GJ display toggle
ENERGY_FIELDS = (
    "energy_from_gas_mmbtu",
    "energy_from_hsd_mmbtu",
    "total_energy_expended_mmbtu",
    "energy_from_gas_prod_mmbtu",
    "energy_from_oil_prod_mmbtu",
    "total_energy_produced_mmbtu",
)

# Returned for any (date, plant) selection with no matching record
BLANK_RECORD = ProcessedRecord(plant_name=PLACEHOLDER_PLANT, date=PLACEHOLDER_DATE)
