"""
KPI computation functions — pure functions with no side effects.

Derives the summary card values from an AggregationResult.
"""

import logging

from .transforms import AggregationResult

logger = logging.getLogger(__name__)


def safe_average(total: float, count: int) -> float:
    """total / count, or 0 when count is 0."""
    if count == 0:
        return 0.0
    return total / count


def get_kpi_summary(result: AggregationResult, daily_table: str = "daily") -> dict:
    """Return a dict of KPI values for the dashboard cards.

    Non-moving materials is always 0: the input lists issuances only, so
    every item it mentions has moved. There is no master item list to
    compare against.

    Daily averages divide the overall totals by the number of distinct days
    with a parseable date. High/low are taken over the per-day sums. All
    daily figures are 0 when no record carries a date.

    Returns
    -------
    Dict with keys:
        unique_items, total_qty, total_value, total_transactions,
        moving_materials, non_moving_materials,
        avg_daily_value, avg_daily_qty,
        high_daily_value, low_daily_value, high_daily_qty, low_daily_qty
    """
    days = result.tables.get(daily_table, {})
    daily_values = [acc.value for acc in days.values()]
    daily_qtys = [acc.qty for acc in days.values()]

    summary = {
        "unique_items": len(result.unique_item_keys),
        "total_qty": result.total_qty,
        "total_value": result.total_value,
        "total_transactions": result.total_transactions,
        "moving_materials": len(result.unique_item_keys),
        "non_moving_materials": 0,
        "avg_daily_value": safe_average(result.total_value, len(days)),
        "avg_daily_qty": safe_average(result.total_qty, len(days)),
        "high_daily_value": max(daily_values, default=0.0),
        "low_daily_value": min(daily_values, default=0.0),
        "high_daily_qty": max(daily_qtys, default=0.0),
        "low_daily_qty": min(daily_qtys, default=0.0),
    }

    logger.info(
        "KPI summary: %d transactions over %d days, %d unique items",
        result.total_transactions,
        len(days),
        summary["unique_items"],
    )
    return summary
