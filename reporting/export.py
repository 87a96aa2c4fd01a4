"""
Tabular export of projection rows (CSV text/file, Excel workbook).
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from core.schema import EXPORT_COLUMNS, MonthRow

_UNSAFE_FILE_CHARS = re.compile(r'[\\/:*?"<>|]')


def rows_to_export_frame(rows: Sequence[MonthRow]) -> pd.DataFrame:
    """One export row per month, columns in EXPORT_COLUMNS order."""
    records = [
        (
            row.date_iso[:7],
            row.base_income,
            row.one_time_income,
            row.base_expenses,
            row.one_time_expense,
            row.debt_min_payments,
            row.debt_extra_payment,
            row.interest_paid,
            row.net_change,
            row.cash_end,
            row.total_debt_end,
        )
        for row in rows
    ]
    frame = pd.DataFrame.from_records(records, columns=list(EXPORT_COLUMNS))
    amount_cols = list(EXPORT_COLUMNS[1:])
    frame[amount_cols] = frame[amount_cols].astype(float)
    return frame


def projection_rows_to_csv(rows: Sequence[MonthRow]) -> str:
    """
    CSV text with a header line. Fields containing a comma, quote or newline
    are quoted, quotes doubled; amounts carry two decimals.
    """
    text = rows_to_export_frame(rows).to_csv(
        index=False,
        float_format="%.2f",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    return text.rstrip("\n")


def sanitize_file_name(name: str) -> str:
    base = re.sub(r"\s+", "-", name.strip().lower())
    base = _UNSAFE_FILE_CHARS.sub("", base)
    return base or "projection"


def write_projection_csv(rows: Sequence[MonthRow], path: Union[str, Path]) -> Path:
    """Write CSV with a UTF-8 BOM so spreadsheet apps detect the encoding."""
    out = Path(path)
    out.write_text("\ufeff" + projection_rows_to_csv(rows), encoding="utf-8")
    return out


def write_projection_excel(rows: Sequence[MonthRow], path: Union[str, Path]) -> Path:
    out = Path(path)
    rows_to_export_frame(rows).to_excel(out, index=False, sheet_name="Projection", engine="openpyxl")
    return out
