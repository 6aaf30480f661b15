"""
Loader for material issuance exports (CSV or Excel).

Each row becomes one record: a plain dict mapping the header, verbatim, to a
loosely typed cell value. Numeric columns are typed by pandas; empty cells
become None.
"""

import logging
import zipfile
from pathlib import Path
from typing import IO, Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class DatasetParseError(ValueError):
    """The input could not be decoded as tabular data."""


class EmptyDatasetError(ValueError):
    """The input parsed but contained no records."""


def _read_frame(source: Any, suffix: str) -> pd.DataFrame:
    if suffix in _EXCEL_SUFFIXES:
        return pd.read_excel(source, sheet_name=0, engine="openpyxl")
    return pd.read_csv(source, skip_blank_lines=True)


def load_issuance_records(
    source: str | Path | IO,
    filename: str | None = None,
) -> list[dict]:
    """Read an issuance export into an ordered list of records.

    Parameters
    ----------
    source : Path or file-like object (e.g. a Streamlit UploadedFile).
    filename : Name used to pick the reader when ``source`` is a buffer.
               Defaults to the path name, or CSV when unknown.

    Returns
    -------
    List of dicts, one per non-blank row. An empty file yields [].

    Raises
    ------
    DatasetParseError
        If the content cannot be parsed as CSV/Excel.
    """
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    suffix = Path(name).suffix.lower()

    try:
        df = _read_frame(source, suffix)
    except pd.errors.EmptyDataError:
        logger.warning("No columns found in %s", name or "upload")
        return []
    except FileNotFoundError:
        raise
    except (
        pd.errors.ParserError,
        UnicodeDecodeError,
        ValueError,
        OSError,
        zipfile.BadZipFile,
        InvalidFileException,
    ) as exc:
        logger.exception("Failed to parse %s", name or "upload")
        raise DatasetParseError(f"Could not parse {name or 'upload'}: {exc}") from exc

    df = df.dropna(how="all")
    df = df.astype(object).where(df.notna(), None)
    records = df.to_dict(orient="records")

    logger.info("Loaded %d issuance records from %s", len(records), name or "upload")
    return records
