import copy

import pytest

from issuance_dashboard.simulator import generate_issuance_records
from issuance_dashboard.transforms import GroupingSpec, aggregate_records


def _row(value, qty, dept, date=None, desc="Widget", **extra):
    row = {"Issued Value": value, "Issued Qty": qty, "DEPARTMENT": dept, "Description": desc}
    if date is not None:
        row["Issue Date"] = date
    row.update(extra)
    return row


@pytest.fixture
def records():
    return [
        _row(100.0, 2, "Maintenance", "05/03/2024", desc="Bolt", **{"Item Code": "B-1"}),
        _row(50.5, 1, "Maintenance", "05/03/2024", desc="Nut"),
        _row(-20.0, -1, "Production", "06/03/2024", desc="Bolt", **{"Item Code": "B-1"}),
        _row(10.0, 4, "Production", "garbage", desc="Tape"),
    ]


def test_totals_and_partition(records):
    result = aggregate_records(records)

    assert result.total_transactions == 4
    assert result.total_value == pytest.approx(140.5)
    assert result.total_qty == pytest.approx(6)

    for name in ("department", "material", "storekeeper"):
        table = result.tables[name]
        assert sum(acc.value for acc in table.values()) == pytest.approx(result.total_value)
        assert sum(acc.qty for acc in table.values()) == pytest.approx(result.total_qty)


def test_grouping_keys(records):
    result = aggregate_records(records)

    assert result.tables["department"]["Maintenance"].value == pytest.approx(150.5)
    assert result.tables["department"]["Production"].qty == pytest.approx(3)
    assert result.tables["material"]["Bolt"].value == pytest.approx(80.0)
    assert result.tables["storekeeper"]["Unknown"].qty == pytest.approx(6)


def test_unparseable_date_excluded_from_date_tables(records):
    result = aggregate_records(records)

    assert set(result.tables["daily"]) == {"2024-03-05", "2024-03-06"}
    assert result.tables["daily"]["2024-03-05"].value == pytest.approx(150.5)
    assert result.undated_records == 1
    assert sum(acc.value for acc in result.tables["weekly"].values()) == pytest.approx(130.5)


def test_unique_items_fall_back_to_description(records):
    result = aggregate_records(records)
    assert result.unique_item_keys == {"B-1", "Nut", "Tape"}


def test_explicit_week_column_wins():
    result = aggregate_records([_row(10.0, 1, "Ops", "05/03/2024", WEEK="2024-W9")])
    assert list(result.tables["weekly"]) == ["2024-W9"]
    assert list(result.tables["daily"]) == ["2024-03-05"]


def test_week_column_without_date():
    result = aggregate_records([_row(10.0, 1, "Ops", WEEK=7)])
    assert list(result.tables["weekly"]) == ["7"]
    assert result.tables["daily"] == {}


def test_record_without_known_headers():
    result = aggregate_records([{"Comment": "??"}])

    assert result.total_value == 0
    assert result.total_qty == 0
    assert result.total_transactions == 1
    assert list(result.tables["department"]) == ["Unknown Dept"]
    assert result.tables["daily"] == {}
    assert result.tables["weekly"] == {}


def test_input_records_not_mutated(records):
    before = copy.deepcopy(records)
    aggregate_records(records)
    assert records == before


def test_idempotent():
    records = generate_issuance_records(n_records=200, seed=7)
    first = aggregate_records(records)
    second = aggregate_records(records)

    assert first.total_value == second.total_value
    assert first.unique_item_keys == second.unique_item_keys
    for name, table in first.tables.items():
        assert {k: (a.value, a.qty) for k, a in table.items()} == {
            k: (a.value, a.qty) for k, a in second.tables[name].items()
        }


def test_custom_grouping_descriptor(records):
    groupings = [
        GroupingSpec(
            "big_issues",
            lambda rec: rec.department,
            include=lambda rec: rec.value >= 50,
        ),
    ]
    result = aggregate_records(records, groupings)

    assert set(result.tables) == {"big_issues"}
    assert set(result.tables["big_issues"]) == {"Maintenance"}
    assert result.total_transactions == 4


def test_table_frame(records):
    frame = aggregate_records(records).table_frame("department")
    assert list(frame.columns) == ["key", "value", "qty"]
    assert len(frame) == 2


def test_simulated_data_partitions_totals():
    result = aggregate_records(generate_issuance_records(n_records=300, seed=3))
    dept_total = sum(acc.value for acc in result.tables["department"].values())
    assert dept_total == pytest.approx(result.total_value)
    assert result.total_transactions == 300
