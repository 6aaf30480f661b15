"""
Configuration: column aliases, placeholders, display constants, chart registry.

COLUMN_ALIASES maps each logical field to the header names that may carry it,
in priority order. Headers are matched case-sensitively.
"""

# ---------------------------------------------------------------------------
# Column aliases — first present, non-empty header wins
# ---------------------------------------------------------------------------
COLUMN_ALIASES: dict[str, list[str]] = {
    "value": ["Issued Value", "Value"],
    "qty": ["Issued Qty", "Quantity"],
    "date": ["Issue Date", "Posting Date", "Transaction Date", "Date", "Date "],
    "department": ["DEPARTMENT", "Department"],
    "material": ["Description", "Material Description", "Material", "Item Name"],
    "item_code": ["Item Code"],
    "storekeeper": ["Issued By", "User", "Storekeeper"],
    "week": ["WEEK"],
}

# Defaults used when no alias matches
UNKNOWN_DEPARTMENT = "Unknown Dept"
UNKNOWN_MATERIAL = "Unknown Material"
UNKNOWN_STOREKEEPER = "Unknown"

# ---------------------------------------------------------------------------
# Material label shortening
# ---------------------------------------------------------------------------
# Unit / packaging tokens stripped when they follow a number ("10MM", "5 PCS")
UNIT_TOKENS = [
    "PCS", "PC", "PKT", "MTR", "ML", "LTR", "GAL", "KG", "MM", "CM", "INCH",
    "Z", "W", "V", "A", "PLY", "BOX", "BTL", "ROLL", "CTN", "%", "X",
]
MAX_LABEL_LENGTH = 30
# A truncated label backs off to its last space only beyond this index
MIN_WORD_BOUNDARY = 10

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
TOP_N = 10
CURRENCY_MARKER = "SAR"
UNIT_MARKER = "Units"
EXCEL_EPOCH = "1899-12-30"

# ---------------------------------------------------------------------------
# Chart registry
# ---------------------------------------------------------------------------
# table: grouped table the chart reads
# metric: "value" or "qty"
# kind: "top_n" (horizontal bar, first TOP_N), "ranked" (vertical bar, all
#       entries), or "trend" (line, ascending key order)
# axis: "Currency" or "Units"
CHART_REGISTRY: dict[str, dict] = {
    "dept_qty": {
        "table": "department",
        "metric": "qty",
        "kind": "top_n",
        "title": "Top 10 Departments by Units",
        "axis": "Units",
        "color": "#3b82f6",
    },
    "dept_value": {
        "table": "department",
        "metric": "value",
        "kind": "top_n",
        "title": "Top 10 Departments by Currency",
        "axis": "Currency",
        "color": "#8b5cf6",
    },
    "storekeeper_qty": {
        "table": "storekeeper",
        "metric": "qty",
        "kind": "ranked",
        "title": "Material Issuance Distribution by Storekeeper",
        "axis": "Units",
        "color": "#f59e0b",
    },
    "material_qty": {
        "table": "material",
        "metric": "qty",
        "kind": "top_n",
        "title": "Fast Moving Materials (Units)",
        "axis": "Units",
        "color": "#14b8a6",
    },
    "material_value": {
        "table": "material",
        "metric": "value",
        "kind": "top_n",
        "title": "Fast Moving Materials (Currency)",
        "axis": "Currency",
        "color": "#f43f5e",
    },
    "daily_qty": {
        "table": "daily",
        "metric": "qty",
        "kind": "trend",
        "title": "Daily Trend (Units)",
        "axis": "Units",
        "color": "#f59e0b",
    },
    "daily_value": {
        "table": "daily",
        "metric": "value",
        "kind": "trend",
        "title": "Daily Trend (Currency)",
        "axis": "Currency",
        "color": "#2563eb",
    },
    "weekly_qty": {
        "table": "weekly",
        "metric": "qty",
        "kind": "trend",
        "title": "Weekly Trend (Units)",
        "axis": "Units",
        "color": "#4f46e5",
    },
    "weekly_value": {
        "table": "weekly",
        "metric": "value",
        "kind": "trend",
        "title": "Weekly Trend (Currency)",
        "axis": "Currency",
        "color": "#059669",
    },
}

# KPI card definitions: key -> (title, is_currency)
KPI_CARDS: dict[str, tuple[str, bool]] = {
    "unique_items": ("Unique Items", False),
    "total_qty": ("Total Quantity", False),
    "total_value": ("Total Value", True),
    "total_transactions": ("Transactions", False),
    "moving_materials": ("Moving Materials", False),
    "non_moving_materials": ("Non-Moving Materials", False),
    "avg_daily_qty": ("Avg Daily Quantity", False),
    "avg_daily_value": ("Avg Daily Value", True),
    "high_daily_value": ("Highest Daily Value", True),
    "low_daily_value": ("Lowest Daily Value", True),
    "high_daily_qty": ("Highest Daily Quantity", False),
    "low_daily_qty": ("Lowest Daily Quantity", False),
}
