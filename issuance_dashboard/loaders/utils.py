"""
Shared utilities for data ingestion: missing-value checks and loose
numeric / text coercion of spreadsheet cells.
"""

import math
from typing import Any

import pandas as pd


def is_missing(val: Any) -> bool:
    """True for None, NaN/NA/NaT and whitespace-only strings."""
    if val is None:
        return True
    if isinstance(val, str):
        return not val.strip()
    if pd.api.types.is_scalar(val):
        try:
            return bool(pd.isna(val))
        except (TypeError, ValueError):
            return False
    return False


def safe_float(val: Any) -> float | None:
    """Coerce a value to a finite float, returning None for non-numeric values.

    Strings may carry thousands separators ("1,250.5") or a trailing percent
    sign ("78%"). Booleans are not treated as numbers.
    """
    if is_missing(val) or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip().replace(",", "")
        if val.endswith("%"):
            val = val[:-1]
    try:
        result = float(val)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(result):
        return None
    return result


def as_label(val: Any) -> str | None:
    """Render a categorical cell as a string, or None when it is empty.

    Integral floats (pandas promotes integer columns with gaps to float)
    render without a trailing ".0".
    """
    if is_missing(val):
        return None
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)
