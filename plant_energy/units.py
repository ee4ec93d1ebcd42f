"""
Energy display units.

Records always store energy in MMBTU. Conversion to the display unit is
applied on read and never written back to a record.
"""

from .config import CANONICAL_ENERGY_UNIT, CONVERSIONS, ENERGY_UNITS
from .records import ENERGY_FIELDS, ProcessedRecord

_UNIT_FACTORS = {
    "MMBTU": 1.0,
    "GJ": CONVERSIONS["MMBTU_TO_GJ"],
}


def unit_factor(unit: str) -> float:
    """Multiplier from MMBTU to `unit`. Raises ValueError for unknown units."""
    if unit not in ENERGY_UNITS:
        raise ValueError(f"Unknown energy unit '{unit}', expected one of {ENERGY_UNITS}")
    return _UNIT_FACTORS[unit]


def convert_energy(value_mmbtu: float, unit: str = CANONICAL_ENERGY_UNIT) -> float:
    return value_mmbtu * unit_factor(unit)


def energy_fields_in_unit(record: ProcessedRecord, unit: str) -> dict[str, float]:
    """Return the record's derived energy values converted to `unit`.

    Keys keep the stored field names; the record itself is untouched.
    """
    factor = unit_factor(unit)
    return {name: getattr(record, name) * factor for name in ENERGY_FIELDS}
