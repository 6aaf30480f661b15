"""
Number formatting for cards, data labels and tooltips.

Short form:  "SAR 1.2 M", "45.3 K Units", "987 Units"
Full form:   "SAR 1,234,567.89", "45,321 Units"
"""

import math

from .config import CURRENCY_MARKER, UNIT_MARKER


def round_half_up(val: float, digits: int = 0) -> float:
    """Round halves towards +infinity, as browser Math.round does."""
    scale = 10 ** digits
    return math.floor(val * scale + 0.5) / scale


def round_for_display(val: float, is_currency: bool) -> float:
    """Currency to 2 decimals, everything else to the nearest integer."""
    if is_currency:
        return round_half_up(val, 2)
    return float(round_half_up(val))


def _compact(val: float, divisor: float, suffix: str) -> str:
    text = f"{val / divisor:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {suffix}"


def _grouped(val: float) -> str:
    # up to 3 fraction digits, trailing zeros dropped
    return f"{val:,.3f}".rstrip("0").rstrip(".")


def _mark(text: str, is_currency: bool) -> str:
    return f"{CURRENCY_MARKER} {text}" if is_currency else f"{text} {UNIT_MARKER}"


def format_short_number(val: float, is_currency: bool = False) -> str:
    """Compact form: M above a million, K above a thousand, else grouped digits."""
    rounded = round_for_display(val, is_currency)
    if rounded >= 1_000_000:
        text = _compact(rounded, 1_000_000, "M")
    elif rounded >= 1_000:
        text = _compact(rounded, 1_000, "K")
    else:
        text = _grouped(rounded)
    return _mark(text, is_currency)


def format_full_number(val: float, is_currency: bool = False) -> str:
    """Full form with thousands separators for tooltips and detail views."""
    if is_currency:
        text = f"{round_half_up(val, 2):,.2f}"
    else:
        text = f"{int(round_half_up(val)):,}"
    return _mark(text, is_currency)
