"""
Date normalisation and day/week bucket keys.

Slash- or dash-separated numeric dates are always read day-first
(05/03/2024 is 5 March), which is how the issuing stores write them.
Everything else goes through pandas' generic parser.
"""

import logging
import math
import numbers
import re
from datetime import date, datetime
from typing import Any

import pandas as pd

from .config import EXCEL_EPOCH

logger = logging.getLogger(__name__)

# day[sep]month[sep]year, year of 2 or 4 digits; a time part may follow
_DMY_PATTERN = re.compile(r"^\s*(\d{1,2})[/\-](\d{1,2})[/\-](\d{4}|\d{2})(?!\d)")
_HAS_DIGIT = re.compile(r"\d")


def normalise_date(val: Any) -> date | None:
    """Convert a raw date cell to a calendar date.

    - datetime / Timestamp / date objects are used directly.
    - Numbers are Excel serial day counts (1899-12-30 epoch).
    - "D/M/YY[YY]" and "D-M-YY[YY]" are day-first; 2-digit years are 20YY.
    - Anything else is handed to pd.Timestamp.

    Returns None for absent or unparseable values. Tokens without a digit
    ("today", "now") and day-first tokens naming an impossible date such as
    31/02/2024 count as unparseable.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (datetime, pd.Timestamp)):
        return None if pd.isna(val) else val.date()
    if isinstance(val, date):
        return val
    if isinstance(val, numbers.Real):
        if not math.isfinite(val):
            return None
        try:
            return (pd.Timestamp(EXCEL_EPOCH) + pd.Timedelta(days=int(val))).date()
        except (ValueError, OverflowError):
            logger.debug("Could not convert serial number %s to date", val)
            return None

    text = str(val)
    match = _DMY_PATTERN.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        if year < 100:
            year += 2000
        try:
            return date(year, month, day)
        except ValueError:
            logger.debug("Day-first date out of range: %s", text)
            return None

    # relative words ("today", "now") carry no digit
    if not _HAS_DIGIT.search(text):
        logger.debug("Could not parse date value: %s", text)
        return None

    try:
        ts = pd.Timestamp(text.strip())
    except (ValueError, TypeError, OverflowError):
        logger.debug("Could not parse date value: %s", text)
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def day_key(d: date) -> str:
    """YYYY-MM-DD bucket key."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def week_number(d: date) -> int:
    """Simplified week-of-year: ceil((weekday + 1 + days since 1 Jan) / 7).

    weekday counts Sunday as 0. This is not ISO-8601 week numbering; week 1
    may be partial and a year can reach week 54.
    """
    weekday = (d.weekday() + 1) % 7
    days = (d - date(d.year, 1, 1)).days
    return math.ceil((weekday + 1 + days) / 7)


def week_key(d: date | None, explicit_week: str | None = None) -> str | None:
    """Weekly bucket key.

    An explicit WEEK value from the record is used verbatim and wins over any
    date-derived key. Otherwise the key is "YYYY-W<n>" (no zero padding), or
    None when there is no date either.
    """
    if explicit_week is not None:
        return explicit_week
    if d is None:
        return None
    return f"{d.year}-W{week_number(d)}"
