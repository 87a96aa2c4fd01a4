"""
Display tables, projection warnings and scenario comparison.
"""

from dataclasses import replace

import pandas as pd

from core.schema import Expense, Settings, Strategy
from engine import project_scenario
from reporting import (
    compare_projections,
    describe_debt_free,
    projection_to_dataframe,
    projection_warnings,
    summary_to_dataframe,
)


def _tight_scenario(make_scenario):
    # cash 250 -> 50 -> -150 -> -350 against a 100 buffer
    return make_scenario(
        expenses=(Expense(id="e1", name="Rent", amount=1200.0),),
        settings=Settings(start_date_iso="2026-01-01", months=3, cash_buffer=100.0, starting_cash=250.0),
    )


class TestProjectionToDataframe:
    def test_one_row_per_month(self, household_scenario):
        df = projection_to_dataframe(project_scenario(household_scenario))
        assert len(df) == 24
        assert list(df.columns[:2]) == ["month_index", "date"]
        assert pd.api.types.is_datetime64_any_dtype(df["date"])
        assert df["date"].is_monotonic_increasing

    def test_values_match_rows(self, debt_scenario):
        projection = project_scenario(debt_scenario)
        df = projection_to_dataframe(projection)
        assert df["cash_end"].tolist() == [r.cash_end for r in projection.rows]
        assert df["total_debt_end"].tolist() == [700.0, 400.0, 100.0, 0.0]


class TestWarnings:
    def test_negative_first_then_buffer(self, make_scenario):
        warnings = projection_warnings(project_scenario(_tight_scenario(make_scenario)))
        assert warnings == [
            "Cash goes negative on month #2 (2026-02-01)",
            "Cash drops below buffer on month #1 (2026-01-01)",
        ]

    def test_no_warnings(self, base_scenario):
        assert projection_warnings(project_scenario(base_scenario)) == []

    def test_debt_free_description(self, debt_scenario):
        assert describe_debt_free(project_scenario(debt_scenario)) == "month #4 (2026-04-01)"

    def test_debt_not_cleared(self, debt_scenario):
        short = replace(debt_scenario, settings=replace(debt_scenario.settings, months=2))
        assert describe_debt_free(project_scenario(short)) == "not within horizon"

    def test_summary_table_includes_warnings(self, make_scenario):
        table = summary_to_dataframe(project_scenario(_tight_scenario(make_scenario)))
        metrics = dict(zip(table["Metric"], table["Value"]))
        assert metrics["Worst Cash"] == "-350.00"
        assert metrics["WARNINGS"].startswith("Cash goes negative")

    def test_summary_table_without_warnings(self, base_scenario):
        table = summary_to_dataframe(project_scenario(base_scenario))
        assert "WARNINGS" not in table["Metric"].tolist()


class TestCompareProjections:
    def test_deltas_are_current_minus_other(self, debt_scenario, base_scenario):
        comparison = compare_projections(project_scenario(debt_scenario), project_scenario(base_scenario))
        assert comparison.end_cash_delta == 700.0
        assert comparison.end_debt_delta == 0.0
        assert comparison.interest_delta == 0.0

    def test_interest_delta(self, household_scenario):
        avalanche = project_scenario(household_scenario)
        no_extra = project_scenario(replace(household_scenario, strategy=Strategy(extra_payment=0.0)))
        comparison = compare_projections(avalanche, no_extra)
        assert comparison.interest_delta < 0
        assert comparison.end_debt_delta < 0

    def test_dataframe(self, base_scenario):
        projection = project_scenario(base_scenario)
        table = compare_projections(projection, projection).to_dataframe()
        assert table["Value"].tolist() == [0.0, 0.0, 0.0]
        assert len(table) == 3
