"""
Aggregation engine: one pass over the issuance records into grouped
value/quantity tables plus running totals.

Groupings are declared in GROUPINGS as (name, key, include) descriptors.
Adding a breakdown means adding a descriptor; the loop in aggregate_records
does not change.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

import pandas as pd

from .dates import day_key, week_key
from .fields import ResolvedRecord, resolve_record

logger = logging.getLogger(__name__)


@dataclass
class GroupAccumulator:
    """Running value and quantity sums for one group key.

    Sums are signed: return/credit rows carry negative amounts.
    """

    value: float = 0.0
    qty: float = 0.0

    def add(self, value: float, qty: float) -> None:
        self.value += value
        self.qty += qty


GroupedTable = dict[str, GroupAccumulator]


@dataclass(frozen=True)
class GroupingSpec:
    """A named breakdown of the records.

    key : derives the group key from a resolved record (None = skip).
    include : extra predicate; records failing it are not grouped.
    """

    name: str
    key: Callable[[ResolvedRecord], str | None]
    include: Callable[[ResolvedRecord], bool] = lambda rec: True


GROUPINGS: list[GroupingSpec] = [
    GroupingSpec("department", lambda rec: rec.department),
    GroupingSpec("material", lambda rec: rec.material),
    GroupingSpec("storekeeper", lambda rec: rec.storekeeper),
    GroupingSpec(
        "daily",
        lambda rec: day_key(rec.date),
        include=lambda rec: rec.date is not None,
    ),
    GroupingSpec("weekly", lambda rec: week_key(rec.date, rec.week)),
]


@dataclass
class AggregationResult:
    """Grouped tables and running totals from one aggregation pass."""

    tables: dict[str, GroupedTable]
    total_value: float = 0.0
    total_qty: float = 0.0
    total_transactions: int = 0
    unique_item_keys: set[str] = field(default_factory=set)
    undated_records: int = 0

    def table_frame(self, name: str) -> pd.DataFrame:
        """Grouped table as a DataFrame with columns: key, value, qty."""
        table = self.tables[name]
        return pd.DataFrame(
            [(key, acc.value, acc.qty) for key, acc in table.items()],
            columns=["key", "value", "qty"],
        )


def aggregate_records(
    records: Iterable,
    groupings: list[GroupingSpec] | None = None,
) -> AggregationResult:
    """Aggregate issuance records in a single pass.

    Parameters
    ----------
    records : Raw records (header -> cell mappings). Not mutated.
    groupings : Breakdown descriptors; defaults to GROUPINGS
                (department, material, storekeeper, daily, weekly).

    Returns
    -------
    AggregationResult with one GroupedTable per grouping, totals, and the
    set of unique item keys (item code, or description when the code is
    missing).
    """
    if groupings is None:
        groupings = GROUPINGS

    result = AggregationResult(tables={spec.name: {} for spec in groupings})

    for record in records:
        rec = resolve_record(record)

        result.total_transactions += 1
        result.total_value += rec.value
        result.total_qty += rec.qty
        result.unique_item_keys.add(rec.item_code)
        if rec.date is None:
            result.undated_records += 1

        for spec in groupings:
            if not spec.include(rec):
                continue
            key = spec.key(rec)
            if key is None:
                continue
            table = result.tables[spec.name]
            if key not in table:
                table[key] = GroupAccumulator()
            table[key].add(rec.value, rec.qty)

    if result.undated_records:
        logger.warning(
            "%d of %d records have no parseable date; excluded from date-bucketed tables",
            result.undated_records,
            result.total_transactions,
        )

    logger.info(
        "Aggregated %d records: %s",
        result.total_transactions,
        ", ".join(f"{name}={len(table)}" for name, table in result.tables.items()),
    )
    return result
