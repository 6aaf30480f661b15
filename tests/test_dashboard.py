import pytest

from issuance_dashboard.dashboard import (
    DashboardSession,
    day_label,
    get_kpi_cards,
    prepare_chart_series,
)
from issuance_dashboard.loaders import EmptyDatasetError
from issuance_dashboard.simulator import generate_issuance_records
from issuance_dashboard.transforms import aggregate_records


def _dept_records(n=15):
    return [
        {"DEPARTMENT": f"Dept {i:02d}", "Issued Value": 100.0 * (i + 1), "Issued Qty": 50 - i}
        for i in range(n)
    ]


def test_top_ten_departments_by_value():
    series = prepare_chart_series(aggregate_records(_dept_records()), "dept_value")

    assert len(series.values) == 10
    assert series.values == sorted(series.values, reverse=True)
    assert series.values[0] == 1500.0
    assert series.full_labels[0] == "Dept 14"
    assert "Dept 04" not in series.full_labels


def test_top_ten_departments_by_qty():
    series = prepare_chart_series(aggregate_records(_dept_records()), "dept_qty")

    assert series.full_labels == [f"Dept {i:02d}" for i in range(10)]
    assert series.values[0] == 50


def test_storekeeper_chart_keeps_every_entry():
    records = [{"Issued By": f"User {i}", "Issued Qty": i} for i in range(12)]
    series = prepare_chart_series(aggregate_records(records), "storekeeper_qty")

    assert len(series.values) == 12
    assert series.values[0] == 11


def test_material_chart_uses_short_labels_and_keeps_full():
    records = [
        {"Description": "HW;  10MM Galvanized Bolt (Grade 8)", "Issued Qty": 3},
        {"Description": "PPE; NITRILE GLOVES SIZE L", "Issued Qty": 5},
    ]
    series = prepare_chart_series(aggregate_records(records), "material_qty")

    assert series.labels == ["Nitrile Gloves", "Galvanized Bolt"]
    assert series.full_labels == ["PPE; NITRILE GLOVES SIZE L", "HW;  10MM Galvanized Bolt (Grade 8)"]


def test_shortening_does_not_merge_groups():
    records = [
        {"Description": "HW; BOLT 10MM", "Issued Qty": 1},
        {"Description": "HW; BOLT 12MM", "Issued Qty": 2},
    ]
    result = aggregate_records(records)
    series = prepare_chart_series(result, "material_qty")

    assert len(result.tables["material"]) == 2
    assert series.labels == ["Bolt", "Bolt"]


def test_long_department_label_wrapped():
    records = [{"DEPARTMENT": "Central Maintenance Workshop And Fabrication Yard", "Issued Qty": 1}]
    series = prepare_chart_series(aggregate_records(records), "dept_qty")
    assert series.labels == [["Central Maintenance Workshop", "And Fabrication Yard"]]


def test_trend_series_ascending_and_rounded():
    records = [
        {"Issue Date": "10/03/2024", "Issued Value": 10.456, "Issued Qty": 2.6},
        {"Issue Date": "02/03/2024", "Issued Value": 5.0, "Issued Qty": 1.2},
    ]
    result = aggregate_records(records)

    qty = prepare_chart_series(result, "daily_qty")
    assert qty.full_labels == ["2024-03-02", "2024-03-10"]
    assert qty.labels == ["02 Mar", "10 Mar"]
    assert qty.values == [1.0, 3.0]

    value = prepare_chart_series(result, "daily_value")
    assert value.values == [5.0, 10.46]


def test_weekly_trend_sorts_keys_as_strings():
    records = [{"WEEK": w, "Issued Qty": 1} for w in ("2024-W9", "2024-W10", "2023-W52")]
    series = prepare_chart_series(aggregate_records(records), "weekly_qty")
    # unpadded week numbers: W10 sorts before W9
    assert series.full_labels == ["2023-W52", "2024-W10", "2024-W9"]


def test_empty_tables_give_empty_series():
    series = prepare_chart_series(aggregate_records([{"DEPARTMENT": "Ops"}]), "daily_value")
    assert series.labels == []
    assert series.values == []


def test_helpers():
    assert day_label("2024-03-05") == "05 Mar"
    assert day_label("2024-W9") == "2024-W9"


def test_kpi_cards_short_and_full():
    cards = get_kpi_cards({"total_value": 1_500_000, "total_qty": 45_300, "unique_items": 12})

    assert cards["total_value"]["short"] == "SAR 1.5 M"
    assert cards["total_value"]["full"] == "SAR 1,500,000.00"
    assert cards["total_qty"]["short"] == "45.3 K"
    assert cards["total_qty"]["full"] == "45,300 Units"
    assert cards["unique_items"]["short"] == "12"
    assert cards["non_moving_materials"]["short"] == "0"


def test_session_load_builds_everything():
    session = DashboardSession(figure_builder=lambda series: series.chart_id)
    assert session.load(generate_issuance_records(n_records=100))

    assert session.loaded
    assert session.kpis["total_transactions"] == 100
    assert set(session.charts) == set(session.series)
    assert session.charts["dept_qty"] == "dept_qty"


def test_session_empty_load_keeps_previous_state():
    session = DashboardSession()
    session.load(generate_issuance_records(n_records=20))
    previous = session.result

    with pytest.raises(EmptyDatasetError):
        session.load([])

    assert session.result is previous
    assert not session.busy


def test_session_replace_returns_previous_chart():
    session = DashboardSession()
    assert session.replace("dept_qty", "first") is None
    assert session.replace("dept_qty", "second") == "first"
    assert session.charts == {"dept_qty": "second"}


def test_session_ignores_load_started_during_a_load():
    inner_results = []

    def reentrant_builder(series):
        inner_results.append(session.load(generate_issuance_records(n_records=5, seed=9)))
        return series.chart_id

    session = DashboardSession(figure_builder=reentrant_builder)
    assert session.load(generate_issuance_records(n_records=20)) is True

    assert inner_results and not any(inner_results)
    assert session.kpis["total_transactions"] == 20
    assert not session.busy


def test_sample_load_does_not_make_attached_upload_new_again():
    session = DashboardSession()
    assert session.is_new_upload("upload-1")

    session.mark_processed("upload-1")
    session.load(generate_issuance_records(n_records=10), source_name="x.csv")
    assert session.source_name == "x.csv"

    session.load(generate_issuance_records(n_records=10, seed=5), source_name="sample data")
    assert session.source_name == "sample data"
    assert not session.is_new_upload("upload-1")

    # a changed file with the same name gets a new upload id
    assert session.is_new_upload("upload-2")
    assert not session.is_new_upload(None)


def test_failed_upload_is_not_retried_and_keeps_source():
    session = DashboardSession()
    session.load(generate_issuance_records(n_records=10), source_name="good.csv")

    session.mark_processed("bad-upload")
    with pytest.raises(EmptyDatasetError):
        session.load([], source_name="bad.csv")

    assert session.source_name == "good.csv"
    assert not session.is_new_upload("bad-upload")
