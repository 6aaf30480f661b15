"""
Field resolution: pull a normalised value out of a raw record given the
priority-ordered header aliases in config.COLUMN_ALIASES.

Resolution never raises. Missing or malformed cells fall back to documented
defaults so a single dirty row cannot abort an aggregation pass.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from .config import (
    COLUMN_ALIASES,
    UNKNOWN_DEPARTMENT,
    UNKNOWN_MATERIAL,
    UNKNOWN_STOREKEEPER,
)
from .dates import normalise_date
from .loaders.utils import as_label, is_missing, safe_float

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedRecord:
    """One record after alias resolution and coercion."""

    value: float
    qty: float
    date: date | None
    department: str
    material: str
    item_code: str
    storekeeper: str
    week: str | None


def first_present(record: Mapping, candidates: list[str]) -> Any:
    """Return the first candidate's cell that is present and non-empty, else None."""
    for header in candidates:
        val = record.get(header)
        if not is_missing(val):
            return val
    return None


def resolve_number(record: Mapping, candidates: list[str]) -> float:
    """Return the first candidate that coerces to a finite number, else 0.0."""
    for header in candidates:
        num = safe_float(record.get(header))
        if num is not None:
            return num
    return 0.0


def resolve_label(record: Mapping, candidates: list[str], default: str | None) -> str | None:
    """Return the first non-empty candidate rendered as a string, else ``default``."""
    label = as_label(first_present(record, candidates))
    return default if label is None else label


def resolve_record(record: Any) -> ResolvedRecord:
    """Resolve every dashboard field of a raw record.

    Records that are not mappings resolve as if every header were missing.
    """
    if not isinstance(record, Mapping):
        logger.debug("Record of type %s is not a mapping; using defaults", type(record).__name__)
        record = {}

    material = resolve_label(record, COLUMN_ALIASES["material"], UNKNOWN_MATERIAL)

    return ResolvedRecord(
        value=resolve_number(record, COLUMN_ALIASES["value"]),
        qty=resolve_number(record, COLUMN_ALIASES["qty"]),
        date=normalise_date(first_present(record, COLUMN_ALIASES["date"])),
        department=resolve_label(record, COLUMN_ALIASES["department"], UNKNOWN_DEPARTMENT),
        material=material,
        item_code=resolve_label(record, COLUMN_ALIASES["item_code"], material),
        storekeeper=resolve_label(record, COLUMN_ALIASES["storekeeper"], UNKNOWN_STOREKEEPER),
        week=resolve_label(record, COLUMN_ALIASES["week"], None),
    )
