"""
Plotly figure builders for the dashboard charts.

Each builder takes a ChartSeries and returns a go.Figure; the chart kind in
config.CHART_REGISTRY picks the builder.
"""

import plotly.graph_objects as go

from .config import CHART_REGISTRY
from .dashboard import ChartSeries
from .formatting import format_full_number, format_short_number


def _display_label(label) -> str:
    return "<br>".join(label) if isinstance(label, list) else str(label)


def _data_labels(series: ChartSeries) -> list[str]:
    labels = [format_short_number(v, series.is_currency) for v in series.values]
    if not series.is_currency:
        labels = [text.rsplit(" ", 1)[0] for text in labels]
    return labels


def _hover_text(series: ChartSeries) -> list[str]:
    return [
        f"<b>{full}</b><br>{series.title}: {format_full_number(v, series.is_currency)}"
        for full, v in zip(series.full_labels, series.values)
    ]


def _apply_layout(fig: go.Figure, series: ChartSeries, height: int) -> go.Figure:
    fig.update_layout(
        title=series.title,
        height=height,
        showlegend=False,
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=60, t=50, b=40),
    )
    return fig


def build_top_n_bar(series: ChartSeries, color: str) -> go.Figure:
    """Horizontal bar chart, largest bar on top."""
    fig = go.Figure(go.Bar(
        x=series.values,
        y=[_display_label(label) for label in series.labels],
        orientation="h",
        marker_color=color,
        text=_data_labels(series),
        textposition="outside",
        hovertext=_hover_text(series),
        hoverinfo="text",
    ))
    fig.update_yaxes(autorange="reversed")
    fig.update_xaxes(title_text=series.axis)
    return _apply_layout(fig, series, height=max(300, len(series.values) * 40))


def build_ranked_bar(series: ChartSeries, color: str) -> go.Figure:
    """Vertical bar chart in the given (descending) order."""
    fig = go.Figure(go.Bar(
        x=[_display_label(label) for label in series.labels],
        y=series.values,
        marker_color=color,
        text=_data_labels(series),
        textposition="outside",
        hovertext=_hover_text(series),
        hoverinfo="text",
    ))
    fig.update_yaxes(title_text=series.axis)
    return _apply_layout(fig, series, height=400)


def build_trend_line(series: ChartSeries, color: str) -> go.Figure:
    """Filled line chart; data labels on the first, last and every third point."""
    text = [
        label if i == 0 or i == len(series.values) - 1 or i % 3 == 0 else ""
        for i, label in enumerate(_data_labels(series))
    ]
    fig = go.Figure(go.Scatter(
        x=[_display_label(label) for label in series.labels],
        y=series.values,
        mode="lines+markers+text",
        line=dict(color=color, width=2, shape="spline"),
        fill="tozeroy",
        marker=dict(size=6, color="#ffffff", line=dict(color=color, width=2)),
        text=text,
        textposition="top center",
        hovertext=_hover_text(series),
        hoverinfo="text",
    ))
    fig.update_xaxes(tickangle=-45)
    fig.update_yaxes(title_text=series.axis)
    return _apply_layout(fig, series, height=350)


_BUILDERS = {
    "top_n": build_top_n_bar,
    "ranked": build_ranked_bar,
    "trend": build_trend_line,
}


def build_figure(series: ChartSeries) -> go.Figure:
    """Build the figure for a ChartSeries using its registry entry."""
    spec = CHART_REGISTRY[series.chart_id]
    return _BUILDERS[spec["kind"]](series, spec["color"])
