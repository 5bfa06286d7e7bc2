import io

import pandas as pd
import pytest

from exoai.errors import FileParseError
from exoai.loader import REQUIRED_FIELDS, load_records, load_single_record, read_table

_LEGACY_CSV = (
    "kepoi_name,koi_prad,koi_period,koi_steff,koi_depth,koi_model_snr\n"
    "K00752.01,2.26,9.488036,5455,615.8,35.8\n"
    "K00752.02,2.83,54.418383,5455,874.8,25.8\n"
)


def _xlsx(sheets: dict[str, pd.DataFrame]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, sheet_name=name, index=False)
    return buf.getvalue()


def test_single_record_is_first_row():
    record = load_single_record(_LEGACY_CSV.encode(), ".csv")

    assert record["kepoi_name"] == "K00752.01"
    assert record["koi_model_snr"] == 35.8
    assert set(REQUIRED_FIELDS) <= set(record)


def test_missing_snr_column_names_the_column():
    data = "koi_prad,koi_period,koi_steff,koi_depth\n2.26,9.49,5455,615.8\n".encode()

    with pytest.raises(FileParseError, match="koi_model_snr"):
        load_single_record(data, ".csv")


def test_batch_load_has_no_required_columns():
    data = "pl_name,pl_orbper,st_teff\nTOI-700 d,37.42,\nTOI-270 c,5.66,3506\n".encode()

    records = load_records(data, ".csv")

    assert len(records) == 2
    assert records[0] == {"pl_name": "TOI-700 d", "pl_orbper": 37.42, "st_teff": None}
    assert records[1]["st_teff"] == 3506


def test_empty_file_is_rejected():
    with pytest.raises(FileParseError, match="empty"):
        load_records(b"", ".csv")


def test_header_only_file_is_rejected():
    with pytest.raises(FileParseError, match="empty"):
        load_records(b"koi_prad,koi_period\n", ".csv")


def test_unsupported_suffix_is_rejected():
    with pytest.raises(FileParseError, match="Unsupported"):
        read_table(b"anything", ".txt")


def test_garbage_workbook_is_rejected():
    with pytest.raises(FileParseError):
        read_table(b"definitely not a workbook", ".xlsx")


def test_workbook_reads_first_sheet_only():
    first = pd.DataFrame(
        {
            "koi_prad": [2.26],
            "koi_period": [9.488036],
            "koi_steff": [5455],
            "koi_depth": [615.8],
            "koi_model_snr": [35.8],
        }
    )
    second = pd.DataFrame({"koi_prad": [99.0]})

    data = _xlsx({"candidates": first, "notes": second})

    record = load_single_record(data, ".XLSX")
    assert record["koi_prad"] == 2.26
    assert len(load_records(data, ".xlsx")) == 1
