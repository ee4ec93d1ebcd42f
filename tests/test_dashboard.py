import pytest

from plant_energy.dashboard import get_analysis_context, get_peer_comparison, get_plant_overview
from plant_energy.dataset import build_dataset
from plant_energy.loaders import parse_row


@pytest.fixture
def dataset(row_factory, example_row):
    rows = [
        example_row,
        row_factory("B", "01-Oct-25", gas_boiler=100, gas_produced=1000, expected_energy_mmbtu=4),
        row_factory("C", "01-Oct-25"),
        row_factory("A", "02-Oct-25", gas_boiler=10, gas_produced=100),
    ]
    return build_dataset([parse_row(r) for r in rows])


def test_overview_cards_and_kpis(dataset):
    overview = get_plant_overview(dataset, "01-Oct-25", "A")

    assert overview["plant"] == "A"
    assert not overview["is_placeholder"]
    assert overview["cards"]["gas_internal"]["value"] == 100
    assert overview["cards"]["energy_expended"]["value"] == pytest.approx(361.96)
    assert overview["cards"]["energy_expended"]["unit"] == "MMBTU"
    assert overview["cards"]["ghg"]["breakdown"]["Scope 2"] == pytest.approx(0.41)

    sec = overview["kpis"]["sec"]
    assert sec["value"] == pytest.approx(0.5)
    assert sec["rag"] == "red"
    assert sec["benchmarks"]["max"]["plant"] == "A"
    assert sec["benchmarks"]["min"]["plant"] == "B"


def test_overview_in_gj_leaves_dataset_unchanged(dataset):
    overview = get_plant_overview(dataset, "01-Oct-25", "A", energy_unit="GJ")

    assert overview["cards"]["energy_expended"]["unit"] == "GJ"
    assert overview["cards"]["energy_expended"]["value"] == pytest.approx(361.96 * 1.05506)
    assert dataset.get_record("01-Oct-25", "A").total_energy_expended_mmbtu == pytest.approx(361.96)


def test_overview_for_missing_selection_is_zeroed(dataset):
    overview = get_plant_overview(dataset, "09-Oct-25", "A")

    assert overview["is_placeholder"]
    assert overview["cards"]["ghg"]["value"] == 0
    assert overview["kpis"]["eii"]["rag"] == "grey"
    assert overview["kpis"]["sec"]["benchmarks"] is None


def test_peer_comparison(dataset):
    df = get_peer_comparison(dataset, "01-Oct-25")

    assert df["plant_name"].tolist() == ["A", "B", "C"]
    ranks = dict(zip(df["plant_name"], df["sec_rank"]))
    assert ranks["B"] == 1
    assert ranks["A"] == 2
    assert df.loc[df["plant_name"] == "C", "sec_rag"].item() == "grey"


def test_peer_comparison_unknown_date(dataset):
    assert get_peer_comparison(dataset, "31-Dec-25").empty


def test_analysis_context(dataset):
    context = get_analysis_context(dataset, "01-Oct-25", "A")

    assert context["plant"]["plant_name"] == "A"
    assert context["plant"]["sec_rank"] == 2
    assert context["peer_count"] == 3
    assert [p["plant_name"] for p in context["peers"]] == ["A", "B", "C"]


def test_analysis_context_for_missing_selection(dataset):
    assert get_analysis_context(dataset, "01-Oct-25", "Z") is None
