"""Data ingestion loaders for material issuance exports."""

from .records import DatasetParseError, EmptyDatasetError, load_issuance_records
from .utils import as_label, is_missing, safe_float

__all__ = [
    "DatasetParseError",
    "EmptyDatasetError",
    "load_issuance_records",
    "as_label",
    "is_missing",
    "safe_float",
]
