"""
Side-by-side comparison of two projections (current scenario vs a saved one).
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from core.schema import Projection
from core.utils import round2


@dataclass(frozen=True)
class ProjectionComparison:
    """Deltas are current minus other."""
    end_cash_delta: float  # positive = current better
    end_debt_delta: float  # negative = current better
    interest_delta: float  # negative = current better

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"Metric": "End Cash Δ", "Value": self.end_cash_delta, "Better When": "positive"},
            {"Metric": "End Debt Δ", "Value": self.end_debt_delta, "Better When": "negative"},
            {"Metric": "Interest Δ", "Value": self.interest_delta, "Better When": "negative"},
        ])


def compare_projections(current: Projection, other: Projection) -> ProjectionComparison:
    a, b = current.summary, other.summary
    return ProjectionComparison(
        end_cash_delta=round2(a.end_cash - b.end_cash),
        end_debt_delta=round2(a.end_debt - b.end_debt),
        interest_delta=round2(a.total_interest_paid - b.total_interest_paid),
    )
