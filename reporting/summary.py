"""
Display tables and user-facing warnings derived from a Projection.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import List, Optional

import pandas as pd

from core.schema import Projection
from core.utils import excel_round

_AMOUNT_COLUMNS = [
    "base_income", "one_time_income", "base_expenses", "one_time_expense",
    "debt_min_payments", "debt_extra_payment", "interest_paid", "principal_paid",
    "net_change", "cash_end", "total_debt_end",
]


def projection_to_dataframe(projection: Projection) -> pd.DataFrame:
    """One row per month, chronological, amounts rounded to cents."""
    if not projection.rows:
        return pd.DataFrame(columns=["month_index", "date"] + _AMOUNT_COLUMNS)
    df = pd.DataFrame([asdict(r) for r in projection.rows])
    df["date"] = pd.to_datetime(df.pop("date_iso"), format="%Y-%m-%d")
    df = df[["month_index", "date"] + _AMOUNT_COLUMNS]
    df[_AMOUNT_COLUMNS] = excel_round(df[_AMOUNT_COLUMNS].to_numpy(), 2)
    return df


def _month_ref(projection: Projection, month_index: Optional[int]) -> Optional[str]:
    if month_index is None:
        return None
    return f"month #{month_index + 1} ({projection.rows[month_index].date_iso})"


def describe_debt_free(projection: Projection) -> str:
    ref = _month_ref(projection, projection.summary.debt_free_month_index)
    return ref if ref is not None else "not within horizon"


def projection_warnings(projection: Projection) -> List[str]:
    """Negative-cash warning first, then the buffer warning; empty when neither happens."""
    s = projection.summary
    warnings = []
    negative = _month_ref(projection, s.first_negative_cash_month_index)
    if negative is not None:
        warnings.append(f"Cash goes negative on {negative}")
    below = _month_ref(projection, s.first_below_buffer_month_index)
    if below is not None:
        warnings.append(f"Cash drops below buffer on {below}")
    return warnings


def summary_to_dataframe(projection: Projection) -> pd.DataFrame:
    """Convert the projection summary to a display-friendly table."""
    s = projection.summary
    rows = [
        {"Metric": "End Cash", "Value": f"{s.end_cash:,.2f}"},
        {"Metric": "End Debt", "Value": f"{s.end_debt:,.2f}"},
        {"Metric": "Total Interest", "Value": f"{s.total_interest_paid:,.2f}"},
        {"Metric": "Total One-time Income", "Value": f"{s.total_one_time_income:,.2f}"},
        {"Metric": "Total One-time Expense", "Value": f"{s.total_one_time_expense:,.2f}"},
        {"Metric": "Worst Cash", "Value": f"{s.worst_cash:,.2f}"},
        {"Metric": "Debt-Free", "Value": describe_debt_free(projection)},
    ]
    warnings = projection_warnings(projection)
    if warnings:
        rows.append({"Metric": "WARNINGS", "Value": " | ".join(warnings)})
    return pd.DataFrame(rows)
