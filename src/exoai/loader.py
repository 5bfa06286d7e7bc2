"""Spreadsheet loading — first-sheet parsing for single-record and batch uploads."""

import io
import logging
import zipfile

import pandas as pd

from exoai.errors import FileParseError
from exoai.models import CandidateRecord

log = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = (
    "koi_prad",
    "koi_period",
    "koi_steff",
    "koi_depth",
    "koi_model_snr",
)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".csv", ".xlsx", ".xls")


def read_table(data: bytes, suffix: str) -> pd.DataFrame:
    """Parse uploaded bytes into a DataFrame (first sheet for workbooks).

    Args:
        data: Raw file contents.
        suffix: Lower-case file extension including the dot.

    Returns:
        Non-empty DataFrame.

    Raises:
        FileParseError: On unsupported type, unreadable content, or no rows.
    """
    suffix = suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise FileParseError(
            f"Unsupported file type '{suffix}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    try:
        if suffix == ".csv":
            df = pd.read_csv(io.BytesIO(data), comment="#")
        else:
            df = pd.read_excel(io.BytesIO(data), sheet_name=0)
    except pd.errors.EmptyDataError as e:
        raise FileParseError("The file is empty or has an invalid format.") from e
    except (ValueError, pd.errors.ParserError, OSError, zipfile.BadZipFile) as e:
        raise FileParseError(f"Could not read the file: {e}") from e

    if df.empty:
        raise FileParseError("The file is empty or has an invalid format.")
    log.info("Read %s rows x %s columns from %s file", len(df), len(df.columns), suffix)
    return df


def _to_records(df: pd.DataFrame) -> list[CandidateRecord]:
    # object dtype first so NaN can become None without numeric upcasting
    cleaned = df.astype(object).where(pd.notna(df), None)
    return [
        {str(k): v for k, v in row.items()} for row in cleaned.to_dict(orient="records")
    ]


def load_single_record(data: bytes, suffix: str) -> CandidateRecord:
    """Legacy single-candidate upload: validate required columns, return the first row.

    Raises:
        FileParseError: When parsing fails or a required column is absent.
    """
    df = read_table(data, suffix)
    for column in REQUIRED_FIELDS:
        if column not in df.columns:
            raise FileParseError(f"Missing required column in the file: {column}")
    return _to_records(df.head(1))[0]


def load_records(data: bytes, suffix: str) -> list[CandidateRecord]:
    """Batch upload: every row as a record. No required-column check."""
    return _to_records(read_table(data, suffix))
