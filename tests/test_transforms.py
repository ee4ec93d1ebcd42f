from dataclasses import replace

import pytest

from plant_energy.loaders import parse_row
from plant_energy.records import PROCESSED_FIELDS, RawRecord
from plant_energy.transforms import build_fact_daily_energy, process_record, process_records


def test_worked_example_end_to_end(example_row):
    rec = process_record(parse_row(example_row))

    assert rec.gas_total_internal == 100
    assert rec.energy_from_gas_mmbtu == pytest.approx(3.96)
    assert rec.energy_from_hsd_mmbtu == pytest.approx(358.0)
    assert rec.total_energy_expended_mmbtu == pytest.approx(361.96)
    assert rec.energy_from_gas_prod_mmbtu == pytest.approx(7.92)
    assert rec.total_energy_produced_mmbtu == pytest.approx(7.92)
    assert rec.ghg_scope1 == pytest.approx(26.688)
    assert rec.ghg_scope2 == pytest.approx(0.41)
    assert rec.ghg_total == pytest.approx(27.098)
    assert rec.sec == pytest.approx(0.5)
    assert rec.eii == pytest.approx(723.92)
    assert rec.emission_intensity == pytest.approx(0.13549)


def test_totals_are_exact_sums():
    raw = RawRecord(
        plant_name="P", date="02-Oct-25",
        gas_boiler=1.1, gas_furnace=2.2, gas_gdu=3.3, gas_engine=4.4, gas_compressor=5.5,
        elec_gcs=10.01, elec_etp=20.02, elec_refinery=30.03,
        water_gcs=0.7, water_refinery=0.9,
        hsd_pumps=0.15, hsd_gensets=0.35,
        hsd_issued_fire=0.1, hsd_issued_psa=0.2, hsd_issued_others=0.3,
    )
    rec = process_record(raw)
    assert rec.gas_total_internal == 1.1 + 2.2 + 3.3 + 4.4 + 5.5
    assert rec.elec_total_consumed == 10.01 + 20.02 + 30.03
    assert rec.water_total == 0.7 + 0.9
    assert rec.hsd_total_consumed == 0.15 + 0.35
    assert rec.hsd_total_issued == 0.1 + 0.2 + 0.3
    assert rec.total_energy_expended_mmbtu == rec.energy_from_gas_mmbtu + rec.energy_from_hsd_mmbtu
    assert rec.total_energy_produced_mmbtu == (
        rec.energy_from_gas_prod_mmbtu + rec.energy_from_oil_prod_mmbtu
    )
    assert rec.ghg_total == rec.ghg_scope1 + rec.ghg_scope2


def test_processing_is_idempotent(example_raw):
    assert process_record(example_raw) == process_record(example_raw)


def test_zero_denominators_give_zero_kpis(example_raw):
    rec = process_record(replace(example_raw, gas_produced=0.0, oil_produced=0.0, expected_energy_mmbtu=0.0))
    assert rec.total_energy_produced_mmbtu == 0
    assert rec.sec == 0
    assert rec.eii == 0
    assert rec.emission_intensity == 0


def test_negative_denominators_give_zero_kpis(example_raw):
    rec = process_record(replace(example_raw, gas_produced=-10.0, oil_produced=0.0, expected_energy_mmbtu=-1.0))
    assert rec.sec == 0
    assert rec.eii == 0
    assert rec.emission_intensity == 0


def test_sec_uses_gas_energy_only(example_raw):
    # HSD energy changes EII but not SEC
    more_hsd = process_record(replace(example_raw, hsd_pumps=50.0))
    base = process_record(example_raw)
    assert more_hsd.sec == base.sec
    assert more_hsd.eii > base.eii


def test_oil_production_counts_towards_energy_produced(example_raw):
    rec = process_record(replace(example_raw, oil_produced=10.0))
    assert rec.energy_from_oil_prod_mmbtu == pytest.approx(58.0)
    assert rec.total_energy_produced_mmbtu == pytest.approx(65.92)


def test_identity_passes_through(example_raw):
    rec = process_record(example_raw)
    assert (rec.plant_name, rec.date) == ("A", "01-Oct-25")
    assert rec.elec_imported == 500.0


def test_fact_table_schema(example_raw):
    df = build_fact_daily_energy(process_records([example_raw, replace(example_raw, plant_name="B")]))
    assert list(df.columns) == list(PROCESSED_FIELDS)
    assert df["plant_name"].tolist() == ["A", "B"]


def test_empty_fact_table_keeps_schema():
    df = build_fact_daily_energy([])
    assert df.empty
    assert list(df.columns) == list(PROCESSED_FIELDS)
