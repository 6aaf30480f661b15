"""
Material Issuance Dashboard

Analytics backend turning a store's material issuance export (CSV/Excel)
into grouped value/quantity tables, KPI cards and chart series.

Pipeline:
    loaders.load_issuance_records(path)  -> list of raw records
    transforms.aggregate_records(records) -> AggregationResult
    kpis.get_kpi_summary(result)         -> dict of KPI values
    dashboard.prepare_chart_series(result, chart_id) -> ChartSeries

To add a breakdown:
    Append a GroupingSpec to transforms.GROUPINGS and, if it should be
    charted, an entry to config.CHART_REGISTRY naming the new table.

To accept another header spelling:
    Add it to the relevant list in config.COLUMN_ALIASES.
"""
