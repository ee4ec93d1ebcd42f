import pytest

from plant_energy.config import FIELD_LABEL_MAP
from plant_energy.records import RawRecord

_LABEL = {field: label for label, field in FIELD_LABEL_MAP.items()}


def make_row(plant="A", date="01-Oct-25", **fields):
    """Header-keyed row with every numeric column present and zero unless given."""
    row = {"Plant Name": plant, "Date": date}
    row.update({label: 0 for label in FIELD_LABEL_MAP})
    for field, value in fields.items():
        row[_LABEL[field]] = value
    return row


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def example_row():
    # Worked example: gas boiler + HSD pumps consumption, grid import, gas production
    return make_row(
        gas_boiler=100,
        hsd_pumps=10,
        elec_imported=500,
        gas_produced=200,
        expected_energy_mmbtu=50,
    )


@pytest.fixture
def example_raw():
    return RawRecord(
        plant_name="A",
        date="01-Oct-25",
        gas_boiler=100.0,
        hsd_pumps=10.0,
        elec_imported=500.0,
        gas_produced=200.0,
        expected_energy_mmbtu=50.0,
    )
