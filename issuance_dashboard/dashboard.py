"""
Dashboard-ready output functions.

Turns an AggregationResult into chart series and KPI card payloads, and
holds the state of one loaded dataset in a DashboardSession.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

import pandas as pd

from .config import CHART_REGISTRY, KPI_CARDS, TOP_N
from .formatting import format_full_number, format_short_number, round_half_up
from .kpis import get_kpi_summary
from .labels import shorten_material_name, wrap_label
from .loaders import EmptyDatasetError
from .transforms import AggregationResult, aggregate_records

logger = logging.getLogger(__name__)


@dataclass
class ChartSeries:
    """Labels and values handed to a chart.

    labels : display labels; a list of strings is a multi-line label.
    values : rounded metric values.
    full_labels : original group keys for tooltips.
    """

    chart_id: str
    title: str
    axis: str
    labels: list = field(default_factory=list)
    values: list[float] = field(default_factory=list)
    full_labels: list[str] = field(default_factory=list)

    @property
    def is_currency(self) -> bool:
        return self.axis == "Currency"

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "label": [" ".join(lab) if isinstance(lab, list) else lab for lab in self.labels],
            "value": self.values,
            "full_label": self.full_labels,
        })


def round_metric(val: float, metric: str) -> float:
    """Quantities to whole units, money to 2 decimals."""
    if metric == "qty":
        return float(round_half_up(val))
    return round_half_up(val, 2)


def day_label(key: str) -> str:
    """Short day label, e.g. 2024-03-05 -> 05 Mar. Non-date keys pass through."""
    try:
        return datetime.strptime(key, "%Y-%m-%d").strftime("%d %b")
    except ValueError:
        return key


def ranked_entries(frame: pd.DataFrame, metric: str, limit: int | None = TOP_N) -> pd.DataFrame:
    """Entries sorted descending by ``metric``, first ``limit`` kept (None = all)."""
    ranked = frame.sort_values(metric, ascending=False, kind="stable")
    if limit is not None:
        ranked = ranked.head(limit)
    return ranked


def trend_entries(frame: pd.DataFrame) -> pd.DataFrame:
    """Entries sorted ascending by key, as plain strings.

    Correct for YYYY-MM-DD keys. Week keys are not zero padded, so 2024-W10
    sorts before 2024-W9.
    """
    return frame.sort_values("key", kind="stable")


def prepare_chart_series(result: AggregationResult, chart_id: str) -> ChartSeries:
    """Build the series for one chart in CHART_REGISTRY."""
    spec = CHART_REGISTRY[chart_id]
    metric = spec["metric"]
    frame = result.table_frame(spec["table"])

    if spec["kind"] == "trend":
        entries = trend_entries(frame)
    else:
        limit = TOP_N if spec["kind"] == "top_n" else None
        entries = ranked_entries(frame, metric, limit)

    keys = [str(k) for k in entries["key"]]
    if spec["table"] == "material":
        labels = [wrap_label(shorten_material_name(k)) for k in keys]
    elif spec["table"] == "daily":
        labels = [day_label(k) for k in keys]
    elif spec["kind"] == "trend":
        labels = list(keys)
    else:
        labels = [wrap_label(k) for k in keys]

    return ChartSeries(
        chart_id=chart_id,
        title=spec["title"],
        axis=spec["axis"],
        labels=labels,
        values=[round_metric(v, metric) for v in entries[metric]],
        full_labels=keys,
    )


def get_kpi_cards(summary: dict) -> dict[str, dict]:
    """KPI card payloads: title plus short and full display strings.

    Count-style cards drop the unit suffix in their short form.
    """
    cards = {}
    for key, (title, is_currency) in KPI_CARDS.items():
        val = summary.get(key, 0)
        short = format_short_number(val, is_currency)
        if not is_currency:
            short = short.rsplit(" ", 1)[0]
        cards[key] = {
            "title": title,
            "value": val,
            "short": short,
            "full": format_full_number(val, is_currency),
        }
    return cards


class DashboardSession:
    """State of the dashboard for the currently loaded dataset.

    A load builds everything first and swaps state only when complete, so a
    failed load leaves the previous dashboard in place. Loads requested while
    one is running are ignored.
    """

    def __init__(self, figure_builder=None):
        self.result: AggregationResult | None = None
        self.kpis: dict = {}
        self.cards: dict[str, dict] = {}
        self.series: dict[str, ChartSeries] = {}
        self.charts: dict = {}
        self.source_name: str | None = None
        self.processed_upload: str | None = None
        self._figure_builder = figure_builder
        self._busy = False

    @property
    def loaded(self) -> bool:
        return self.result is not None

    @property
    def busy(self) -> bool:
        return self._busy

    def replace(self, chart_id: str, figure):
        """Install ``figure`` for ``chart_id``, dropping and returning the previous one."""
        previous = self.charts.pop(chart_id, None)
        self.charts[chart_id] = figure
        return previous

    def is_new_upload(self, upload_id: str | None) -> bool:
        """True when ``upload_id`` has not been processed yet.

        Independent of ``source_name``; loading sample data leaves it unchanged.
        """
        return upload_id is not None and upload_id != self.processed_upload

    def mark_processed(self, upload_id: str) -> None:
        """Record ``upload_id`` as handled, whether or not it loaded."""
        self.processed_upload = upload_id

    def load(self, records: Iterable, source_name: str | None = None) -> bool:
        """Aggregate ``records`` and replace the dashboard state.

        ``source_name`` is shown as the data source once the load succeeds.

        Returns False if another load is in progress.

        Raises
        ------
        EmptyDatasetError
            If ``records`` is empty. The previous state is kept.
        """
        if self._busy:
            logger.warning("Load ignored: a dataset is already being processed")
            return False

        self._busy = True
        try:
            records = list(records)
            if not records:
                raise EmptyDatasetError("No data found in the uploaded file.")

            result = aggregate_records(records)
            kpis = get_kpi_summary(result)
            cards = get_kpi_cards(kpis)
            series = {chart_id: prepare_chart_series(result, chart_id) for chart_id in CHART_REGISTRY}
            figures = {}
            if self._figure_builder is not None:
                figures = {chart_id: self._figure_builder(s) for chart_id, s in series.items()}

            self.result = result
            self.kpis = kpis
            self.cards = cards
            self.series = series
            self.source_name = source_name
            for chart_id, figure in figures.items():
                self.replace(chart_id, figure)
        finally:
            self._busy = False

        logger.info("Dashboard loaded: %d transactions", self.kpis["total_transactions"])
        return True
